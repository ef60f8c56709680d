"""State model and terminal layout helpers for a text-mode IRC client."""

__version__ = "0.1.7"