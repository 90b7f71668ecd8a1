"""Qt adapters for presenting a game."""
