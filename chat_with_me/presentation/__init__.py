"""CLI and chat UI."""
