"""Read, diff, filter, export and report on secrets stored at Vault paths."""

__version__ = "0.1.0"