"""Terminal interactive-fiction client built around a small story interpreter."""

__version__ = "0.1.0"
