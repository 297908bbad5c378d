"""Rules engine for Scotland Yard, the hidden-movement pursuit game."""

__version__ = "0.1.0"
