"""tagnorm: normalize music tag dialects into one canonical track record."""

__version__ = "0.1.0"
