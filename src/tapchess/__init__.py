"""tapchess — tap-driven two-player chess board engine."""

__version__ = "0.1.0"
