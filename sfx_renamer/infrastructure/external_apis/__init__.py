"""
External APIs Module

Contains external API clients:
- NLPServiceClient: Chinese POS tagging service client with aiohttp
"""

from .nlp_service import NLPServiceClient, map_service_pos

__all__ = [
    "NLPServiceClient",
    "map_service_pos",
]
