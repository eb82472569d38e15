"""A falling-block puzzle game for the terminal, with its board, pieces and curses display."""

__version__ = "0.1.0"