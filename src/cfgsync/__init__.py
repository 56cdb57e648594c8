"""cfgsync - compile and sync exec-linked .cfg trees with a GitHub gist."""

__version__ = "0.1.0"
