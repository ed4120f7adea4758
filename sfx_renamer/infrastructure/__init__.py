"""
Infrastructure Layer - External Services and Local Resources

This layer holds the pieces that talk to the outside world or keep
process-local state for the application layer.

Modules:
- cache: Bounded in-memory caches (POS analysis, translations)
- external_apis: External NLP service client
- file_system: Local directory host for renaming files
"""
