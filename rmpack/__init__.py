"""Low-level MessagePack markers, readers, writers and message length estimation."""

__version__ = "0.1.0"