"""
hilicat - a cat-like viewer with regex-driven syntax highlighting.

Source files or standard input are printed with ANSI colors produced by
per-language regular expression rules, optionally numbered, squeezed and
paged.
"""

from .settings.config import APP_VERSION

__version__ = APP_VERSION

__all__ = ["__version__"]
