"""mediashelf – a folder-based media library browser."""

__version__ = "0.1.0"
