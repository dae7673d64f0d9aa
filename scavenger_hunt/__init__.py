"""QR code scavenger hunt service."""

__version__ = "1.0.0"
