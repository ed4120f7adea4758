"""
Tests Module

Test suites for SFX Renamer:
- unit: Catalogue, tokenizer, matching, classification, naming, translation
- integration: The file pipeline end to end against a temporary directory

Shared fixtures live in conftest.py.
"""
