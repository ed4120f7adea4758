"""
File System Infrastructure

Local directory implementation of the host file API.
"""

from .local_host import LocalFileHost

__all__ = ["LocalFileHost"]
