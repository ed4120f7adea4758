"""
Application Layer - Business Logic and Services

This layer implements the renaming workflow and coordinates the domain
records with the infrastructure clients, using asyncio for everything
that may wait on the network.

Modules:
- catalogue: Term catalogue loading and lookups
- tokenizer: POS analysis of Chinese and English text
- matching: Token and fuzzy matching engines
- classification: Strategy cascade and AI classification hints
- translation: Translation providers and the caching service
- naming_manager: Number extraction, normalization, naming formats, validation
- pipeline: Sequential per-file processing and renaming
"""
