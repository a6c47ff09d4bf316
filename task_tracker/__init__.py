"""Task Tracker: an in-memory task collection served over a REST API."""

__version__ = "1.0.0"
