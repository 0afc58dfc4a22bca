"""Book tree, book.toml configuration model and helpers for building books from Markdown."""

__version__ = "0.5.0a1"

__all__ = ["book", "config", "fs", "settings", "strings", "tomlext", "utils"]