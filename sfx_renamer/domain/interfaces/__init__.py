"""
Domain Interfaces Module

Contains abstract interfaces for collaborators outside the engine:
- HostFileAPI: the asset host that lists items and renames them by id
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List

# Host item: {"id", "name", "ext", "tags", "path"}
HostItem = Dict[str, Any]


class HostFileAPI(ABC):
    """
    宿主文件接口

    Items are plain mappings with id, name (without extension), ext,
    tags and path. rename() raises RenameError on failure.
    """

    @abstractmethod
    async def get_selected(self) -> List[HostItem]:
        """Items currently selected in the host."""

    @abstractmethod
    async def get_by_folder(self, folder_id: str) -> List[HostItem]:
        """Items inside one host folder."""

    @abstractmethod
    async def get_by_tag(self, tag: str) -> List[HostItem]:
        """Items carrying a tag."""

    @abstractmethod
    async def rename(self, item_id: str, new_name: str) -> None:
        """Rename an item; new_name includes the extension."""


__all__ = ["HostFileAPI", "HostItem"]
