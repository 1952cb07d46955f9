"""Value conversion, nested map helpers, format codecs and flag values for layered configuration."""

__version__ = "0.1.0"

__all__ = ["cast", "codecs", "errors", "flags", "maps"]