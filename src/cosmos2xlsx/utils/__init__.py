"""Shared utilities: console output and persistent settings."""
