"""Data models shared across backends and the API."""
