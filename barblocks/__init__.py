"""Status-bar block logic for Linux desktops: parsing, states and display values."""

__version__ = "0.1.0"