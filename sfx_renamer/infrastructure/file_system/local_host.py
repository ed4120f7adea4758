"""
Local File Host

HostFileAPI over one directory on disk. Item ids are paths relative to
the root; folders are sub-directories; tags are not supported.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

from ...domain.exceptions import RenameError
from ...domain.interfaces import HostFileAPI, HostItem

logger = logging.getLogger(__name__)


class LocalFileHost(HostFileAPI):
    """
    本地目录宿主

    Usage:
        host = LocalFileHost("~/sfx/incoming", extensions=("wav", "flac"))
        items = await host.get_selected()
        await host.rename(items[0]["id"], "FOLFoot_脚步_Footsteps Snow_01.wav")
    """

    def __init__(
        self,
        root: Union[str, Path],
        extensions: Optional[Iterable[str]] = None,
        recursive: bool = False,
    ):
        self._root = Path(root).expanduser()
        self._extensions = {e.lower().lstrip(".") for e in extensions} if extensions else None
        self._recursive = recursive

    @property
    def root(self) -> Path:
        return self._root

    def _item(self, path: Path) -> HostItem:
        return {
            "id": path.relative_to(self._root).as_posix(),
            "name": path.stem,
            "ext": path.suffix.lstrip("."),
            "tags": [],
            "path": path,
        }

    def _scan(self, directory: Path) -> List[HostItem]:
        if not directory.is_dir():
            logger.warning(f"Not a directory: {directory}")
            return []
        paths = directory.rglob("*") if self._recursive else directory.iterdir()
        items = []
        for path in sorted(paths):
            if not path.is_file() or path.name.startswith("."):
                continue
            if self._extensions is not None and path.suffix.lower().lstrip(".") not in self._extensions:
                continue
            items.append(self._item(path))
        return items

    async def get_selected(self) -> List[HostItem]:
        """Every matching file under the root."""
        return self._scan(self._root)

    async def get_by_folder(self, folder_id: str) -> List[HostItem]:
        return self._scan(self._root / folder_id)

    async def get_by_tag(self, tag: str) -> List[HostItem]:
        logger.debug(f"Local host has no tags, nothing matches {tag!r}")
        return []

    def _rename_sync(self, item_id: str, new_name: str) -> None:
        source = self._root / item_id
        if not source.is_file():
            raise RenameError(item_id, "file not found")

        target = source.with_name(new_name)
        if target == source:
            return
        if target.exists() and target.name.lower() != source.name.lower():
            raise RenameError(item_id, f"target already exists: {target.name}")

        try:
            source.rename(target)
        except OSError as e:
            raise RenameError(item_id, str(e)) from e
        logger.info(f"Renamed {source.name} -> {target.name}")

    async def rename(self, item_id: str, new_name: str) -> None:
        """
        Rename a file in place.

        Raises:
            RenameError: Missing source, existing target or OS failure
        """
        await asyncio.to_thread(self._rename_sync, item_id, new_name)
