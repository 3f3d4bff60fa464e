"""Deterministic process exit-code mapping for the CLI."""

SUCCESS = 0
FAILURE = 1
UNEXPECTED = 2
