"""Core — Search engine facade over the plugin manager."""
