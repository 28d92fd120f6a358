"""JSON Pointer, JSON Patch and JSON Merge Patch for plain Python data."""

__version__ = "1.4.7"
__all__ = ["merge", "patch", "pointer", "sorting"]