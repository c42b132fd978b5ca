"""BitScope API: cached read-through proxy for a blockchain explorer."""

__version__ = "1.0.0"
