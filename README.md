# termtetris

termtetris is a falling-block puzzle game that runs in your terminal. The board
is ten columns wide and twenty-two rows tall. The top two rows are hidden, so
twenty rows are visible. The next piece is shown beside the board, together
with your score, your level and the number of lines cleared on the current
level.

## Installing

```
pip install .
```

The game draws with `curses` and defines its own colours. It needs a terminal
that offers enough colours and allows them to be redefined. If the terminal has
too few colours, the game stops with a message suggesting
`TERM=xterm-256color`.

## Playing

Start the game with two keys. The first key rotates the piece
counter-clockwise and the second rotates it clockwise. Only the first
character of each argument is used.

```
termtetris a d
```

You must give exactly two arguments, and neither may be empty. Otherwise the
command prints a usage message to standard error, exits with status 2 and does
not start a game.

A countdown from three runs before the first piece falls.

| Key          | Action                                          |
|--------------|-------------------------------------------------|
| Left / Right | move the piece sideways                         |
| Down         | soft drop: move down one row and score 1 point  |
| Space        | hard drop: score 1 point for each row fallen    |
| first key    | rotate counter-clockwise                        |
| second key   | rotate clockwise                                |
| `p`          | pause or resume                                 |
| `q`          | quit                                            |

A rotation that does not fit is tried again with the piece shifted one column
to the right. The I piece is also tried two columns to the right. The last
attempt shifts the piece one column to the left. If none of these positions
fits, the piece keeps its current rotation.

## Scoring and levels

Clearing 1, 2, 3 or 4 lines at once scores 40, 100, 300 or 1200 points. That
amount is multiplied by the current level plus one.

Every ten cleared lines raise the level by one. The speed at each level is set
in `termtetris.game.SPEEDS`, which gives the number of frames between two
automatic falls; `frames_per_gridcell(level)` returns it.

The game ends when a new piece overlaps blocks that are already on the board,
or when you press `q`. The board is then cleared and "Game Over!" is shown for
a few seconds.

## Using the game logic in code

The game logic runs without a real terminal. `MockTerminalManager` in
`termtetris.terminal` records what is drawn instead of showing it:

```python
from termtetris.terminal import MockTerminalManager
from termtetris.game import Tetris

screen = MockTerminalManager(11, 30, 30)
game = Tetris(screen, ord("d"), ord("a"), None)
game.create_test_tetrominos()
game.draw_field()
print(screen.is_pixel_drawn(5, 4))  # True
```

Other useful classes:

- `Playfield` in `termtetris.playfield` holds the board.
- `Tetromino` and `Shape` in `termtetris.tetromino` describe the pieces.
- `Tetris.update()` advances the game by one gravity step.
- `Tetris.process_user_input(keycode)` applies one key press.
- `Tetris.play(read_key)` runs the whole game loop. It takes a callable that
  returns one key code per frame.
- `Tetris` accepts any random source with a `randrange` method, so a seeded
  `random.Random` gives a repeatable sequence of pieces.

## Limitations

- High scores are not saved anywhere.
- Mouse clicks are read by `CursesTerminalManager.get_user_input`, but the game
  does not act on them.