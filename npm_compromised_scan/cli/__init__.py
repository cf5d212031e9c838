"""Command line interface for npm-compromised-scan."""
