"""Reporters — terminal and JSON."""
