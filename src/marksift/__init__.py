"""MarkSift — Pluggable bookmark search with a live-store fallback backend."""

__version__ = "0.1.0"
