"""arangotui — terminal browser for ArangoDB databases, collections and graphs."""

__version__ = "0.1.0"
