"""appdrop - zero-config macOS release CLI."""

__version__ = "0.1.0"
