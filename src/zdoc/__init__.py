"""zdoc - Lua library compiler and annotator for reflected Java APIs."""

__version__ = "0.4.0"
