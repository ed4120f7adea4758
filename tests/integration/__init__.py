"""Integration tests: pipeline, local host and command line."""
