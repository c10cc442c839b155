"""Configuration — Pydantic settings loaded from env vars and YAML."""
