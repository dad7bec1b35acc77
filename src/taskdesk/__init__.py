"""taskdesk - single-user desktop task manager (domain and persistence layer)."""

__version__ = "0.1.0"
