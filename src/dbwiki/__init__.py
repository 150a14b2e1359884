"""DBWiki: a small wiki served from a relational database."""

__version__ = "0.1.0"
