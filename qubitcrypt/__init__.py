"""Classical and post-quantum digital signature algorithms behind one interface."""

__version__ = "0.1.0"