"""Project database records and the rules for storage quota and expiry alerts."""

__version__ = "0.1.0"