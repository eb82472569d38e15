import pytest

from termtetris.config import Config
from termtetris.terminal import Color


def test_keys_come_from_arguments_in_order():
    config = Config(["a", "d"])
    assert config.rotate_ccw == ord("a")
    assert config.rotate_cw == ord("d")


def test_only_first_character_of_each_argument_counts():
    config = Config(["xylophone", "yak"])
    assert config.rotate_ccw == ord("x")
    assert config.rotate_cw == ord("y")


@pytest.mark.parametrize("argv", [[], ["a"], ["a", "d", "e"]])
def test_wrong_number_of_arguments_is_a_usage_error(argv):
    with pytest.raises(ValueError, match="Usage"):
        Config(argv)


def test_empty_key_is_a_usage_error():
    with pytest.raises(ValueError, match="rotate_clockwise_key"):
        Config(["a", ""])


def test_palette_has_a_pair_for_every_game_color():
    colors = Config.colors()
    assert len(colors) == 11
    assert all(background == Color(0.0, 0.0, 0.0) for _, background in colors)


def test_palette_fixes_text_and_border_colors():
    colors = Config.colors()
    assert colors[0][0] == Color(0.0, 0.0, 0.0)
    assert colors[9][0] == Color(1.0, 1.0, 1.0)
    assert colors[10][0] == Color(0.5, 0.5, 0.5)


def test_piece_colors_are_distinct():
    foregrounds = [fg for fg, _ in Config.colors()[2:9]]
    assert len(set(foregrounds)) == len(foregrounds)


def test_colors_returns_an_independent_list():
    first = Config.colors()
    first.clear()
    assert len(Config.colors()) == 11