"""shows.csv -> shows.json builder for the theatre log page."""

__version__ = "0.1.0"
