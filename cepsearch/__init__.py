"""Brazilian CEP lookup: an HTTP server that queries two address providers at once, and a client for it."""

__version__ = "0.1.0"

__all__ = ["__version__"]