"""
Domain Layer - Core Business Entities and Value Objects

This layer defines the records exchanged between the catalogue, the
tokenizer, the matching engines and the file pipeline. It has no
dependency on infrastructure.

Modules:
- models: Term, word, match and file records plus category tables
- exceptions: Domain-specific exceptions
- interfaces: Host file API contract
"""
