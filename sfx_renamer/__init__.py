"""
SFX Renamer - Bilingual Sound Effect Renaming Engine

A layered library that classifies informal, bilingual (Chinese/English)
sound effect filenames against a controlled term catalogue and renders
UCS-style filenames from the result.

Architecture:
- Core Layer: Configuration and settings objects
- Domain Layer: Term, word and file records, exceptions
- Application Layer: Catalogue, tokenizer, matching engines, classifier,
  naming formatter, translation and the file pipeline
- Infrastructure Layer: Caching, external NLP service client, local file host
"""

__version__ = "1.0.0"
__author__ = "SFX Renamer Team"
__description__ = "Bilingual sound effect renaming engine"
