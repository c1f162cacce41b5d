"""folio: resume rendering with mixed Latin and CJK text."""

__version__ = "0.1.0"
