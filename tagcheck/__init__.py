"""Tag-driven validation of values, dataclasses, sequences and mappings."""

__version__ = "0.1.0"