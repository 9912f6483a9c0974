"""A small library management system: books, readers, loans, fines and an admin console."""

__version__ = "0.1.0"
__all__ = ["__version__"]