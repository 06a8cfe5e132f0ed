"""hoopbug: follow an NBA game in your shell."""

__version__ = "0.1.0"
