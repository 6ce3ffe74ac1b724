"""postflow — draft-to-published lifecycle for a static-site blog."""

__version__ = "0.1.0"
