"""sysbak — catalog installed system packages and replay them elsewhere."""

__version__ = "0.1.0"
