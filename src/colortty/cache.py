"""On-disk cache of downloaded color scheme files.

Each catalog gets its own directory holding one file per scheme, named
``<scheme name><extension>``. File system calls run in worker threads so a
batch of downloads can write concurrently from the event loop.
"""

import asyncio
import logging
from pathlib import Path
from typing import List

from .errors import CacheReadError, CacheWriteError, CreateCacheDirError, ReadCacheDirError

logger = logging.getLogger(__name__)


class SchemeCache:
    """Cache directory for one catalog."""

    def __init__(self, directory: Path, extension: str):
        """Initialize the cache.

        Args:
            directory: Directory holding the cached scheme files
            extension: File extension of the catalog, including the dot
        """
        self.directory = Path(directory)
        self.extension = extension

    def path_for(self, name: str) -> Path:
        """Return the cache path of the scheme called ``name``."""
        return self.directory / f"{name}{self.extension}"

    async def ensure_directory(self) -> None:
        """Create the cache directory and its parents if missing."""
        try:
            await asyncio.to_thread(self.directory.mkdir, parents=True, exist_ok=True)
        except OSError as e:
            raise CreateCacheDirError(
                f"Failed to create the cache directory {self.directory}: {e}"
            ) from e

    async def write(self, name: str, body: str) -> None:
        path = self.path_for(name)
        try:
            await asyncio.to_thread(path.write_text, body, encoding="utf-8")
        except OSError as e:
            raise CacheWriteError(f"Failed to write a color scheme file for {name}: {e}") from e
        logger.debug(f"Cached {name} at {path}")

    async def read(self, name: str) -> str:
        path = self.path_for(name)
        try:
            return await asyncio.to_thread(path.read_text, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise CacheReadError(f"Failed to read the color scheme file for {name}: {e}") from e

    async def names(self) -> List[str]:
        """List cached scheme names, sorted.

        Raises:
            ReadCacheDirError: If the directory is missing or unreadable
        """
        try:
            entries = await asyncio.to_thread(self._scan)
        except OSError as e:
            raise ReadCacheDirError(
                f"Failed to read the cache directory {self.directory}: {e}"
            ) from e
        return sorted(entries)

    async def is_empty(self) -> bool:
        try:
            return not await self.names()
        except ReadCacheDirError:
            return True

    def _scan(self) -> List[str]:
        names = []
        for entry in self.directory.iterdir():
            filename = entry.name
            if filename == self.extension or not filename.endswith(self.extension):
                continue
            if not entry.is_file():
                continue
            names.append(filename[: -len(self.extension)])
        return names
