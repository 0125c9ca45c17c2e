"""Small terminal text editor with incremental search and syntax highlighting."""

__all__ = [
    "adapters",
    "actions",
    "buffer",
    "editor",
    "keymaps",
    "modes",
    "runtime",
    "search",
    "syntax",
]

__version__ = "0.1.0"
