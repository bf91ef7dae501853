"""QuickRead - multi-format document reader with in-document search."""

__version__ = "0.1.0"
