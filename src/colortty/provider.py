"""Color scheme providers backed by GitHub repositories.

A :class:`Provider` describes one catalog (owner, repository, directory and
file extension) and implements listing, fetching and caching of its schemes.
"""

import asyncio
import logging
from pathlib import Path
from typing import Any, Dict, List, Tuple

from .cache import SchemeCache
from .catalog import parse_catalog_listing
from .errors import HttpGetError, UnknownProvider
from .parsers import ColorSchemeFormat
from .scheme import ColorScheme

logger = logging.getLogger(__name__)

DEFAULT_BRANCH = "master"
MAX_CONCURRENT_DOWNLOADS = 10

RAW_CONTENT_URL = "https://raw.githubusercontent.com"
CONTENTS_API_URL = "https://api.github.com/repos"

# name -> (owner, repository, scheme directory, extension)
CATALOGS: Dict[str, Tuple[str, str, str, str]] = {
    "iterm": ("mbadolato", "iTerm2-Color-Schemes", "schemes", ".itermcolors"),
    "gogh": ("Gogh-Co", "Gogh", "themes", ".sh"),
}


class Provider:
    """A GitHub repository that provides color schemes."""

    def __init__(self, user_name: str, repo_name: str, list_path: str, extension: str,
                 *, cache_root: Path, client: Any,
                 branch: str = DEFAULT_BRANCH,
                 max_concurrency: int = MAX_CONCURRENT_DOWNLOADS):
        """Initialize a provider.

        Args:
            user_name: Repository owner
            repo_name: Repository name
            list_path: Directory of the repository holding the scheme files
            extension: Scheme file extension, including the dot
            cache_root: Root of the colortty cache directory
            client: Object with async ``get_text(url)`` and ``get_json(url)``,
                normally a :class:`~colortty.catalog.CatalogClient`
            branch: Branch the raw files are read from
            max_concurrency: Maximum number of simultaneous downloads
        """
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")

        self.user_name = user_name
        self.repo_name = repo_name
        self.list_path = list_path
        self.extension = extension
        self.branch = branch
        self.max_concurrency = max_concurrency
        self.client = client
        self.cache_root = Path(cache_root)
        self.cache = SchemeCache(self.repo_dir, extension)

        scheme_format = ColorSchemeFormat.from_filename(extension)
        if scheme_format is None:
            raise ValueError(f"No parser for color scheme extension {extension}")
        self.format = scheme_format

    @classmethod
    def iterm(cls, **kwargs) -> "Provider":
        """Returns a provider for ``mbadolato/iTerm2-Color-Schemes``."""
        return cls(*CATALOGS["iterm"], **kwargs)

    @classmethod
    def gogh(cls, **kwargs) -> "Provider":
        """Returns a provider for ``Gogh-Co/Gogh``."""
        return cls(*CATALOGS["gogh"], **kwargs)

    @classmethod
    def from_name(cls, name: str, **kwargs) -> "Provider":
        """Returns the provider registered as ``name``.

        Raises:
            UnknownProvider: If no provider has that name
        """
        catalog = CATALOGS.get(name)
        if catalog is None:
            raise UnknownProvider(name)
        return cls(*catalog, **kwargs)

    def __repr__(self) -> str:
        return f"Provider({self.user_name}/{self.repo_name}/{self.list_path}, {self.extension})"

    # Remote operations

    async def get(self, name: str) -> ColorScheme:
        """Fetches and parses one color scheme, bypassing the cache."""
        try:
            body = await self.client.get_text(self.individual_url(name))
        except HttpGetError as e:
            raise HttpGetError(f"Failed to get color scheme raw content for {name}: {e}") from e
        return self.parse_color_scheme(body)

    async def list(self) -> List[Tuple[str, ColorScheme]]:
        """Returns all color schemes of the provider, sorted by name.

        Schemes are read from the cache; the whole catalog is downloaded
        first when nothing is cached yet.
        """
        if await self.cache.is_empty():
            logger.debug(f"No cached color schemes for {self!r}")
            await self.download_all()
        return await self.read_color_schemes()

    async def update(self) -> List[Tuple[str, ColorScheme]]:
        """Re-downloads the catalog and returns the refreshed schemes."""
        await self.download_all()
        return await self.read_color_schemes()

    async def download_all(self) -> None:
        """Download color scheme files into the cache directory.

        Files are fetched in sequential batches of at most
        ``max_concurrency`` requests; the first failure stops the download.
        """
        logger.info(f"Downloading color schemes into {self.repo_dir}")
        await self.cache.ensure_directory()

        names = await self.fetch_names()
        batch_size = self.max_concurrency
        for start in range(0, len(names), batch_size):
            batch = names[start:start + batch_size]
            logger.debug(
                f"Downloading batch {start // batch_size + 1} "
                f"({len(batch)} of {len(names)} schemes)"
            )
            await _join_all([self.download_color_scheme(name) for name in batch])

        logger.info(f"Downloaded {len(names)} color schemes")

    async def fetch_names(self) -> List[str]:
        """Returns the scheme names published in the remote listing."""
        try:
            payload = await self.client.get_json(self.list_url())
        except HttpGetError as e:
            raise HttpGetError(f"Failed to download a color scheme list: {e}") from e

        names = []
        for entry in parse_catalog_listing(payload):
            filename = entry.name
            # Files starting with `_` are Gogh internals.
            if filename.startswith("_") or not filename.endswith(self.extension):
                continue
            names.append(filename[: -len(self.extension)])
        return names

    async def download_color_scheme(self, name: str) -> None:
        """Downloads a color scheme file and saves it in the cache directory."""
        try:
            body = await self.client.get_text(self.individual_url(name))
        except HttpGetError as e:
            raise HttpGetError(f"Failed to download a color scheme file for {name}: {e}") from e
        await self.cache.write(name, body)

    # Cache operations

    async def read_color_schemes(self) -> List[Tuple[str, ColorScheme]]:
        """Read color schemes from the cache directory."""
        names = await self.cache.names()
        return list(await asyncio.gather(*(self.read_color_scheme(name) for name in names)))

    async def read_color_scheme(self, name: str) -> Tuple[str, ColorScheme]:
        """Reads a color scheme from the repository cache."""
        body = await self.cache.read(name)
        return name, self.parse_color_scheme(body)

    # Locations

    @property
    def repo_dir(self) -> Path:
        """The repository cache directory."""
        return self.cache_root / "repositories" / self.user_name / self.repo_name

    def individual_path(self, name: str) -> Path:
        """Returns the cache path for the given color scheme name."""
        return self.cache.path_for(name)

    def individual_url(self, name: str) -> str:
        """Returns the URL for a color scheme on GitHub."""
        return (
            f"{RAW_CONTENT_URL}/{self.user_name}/{self.repo_name}/{self.branch}/"
            f"{self.list_path}/{name}{self.extension}"
        )

    def list_url(self) -> str:
        """Returns the URL for the color scheme list on GitHub API."""
        return f"{CONTENTS_API_URL}/{self.user_name}/{self.repo_name}/contents/{self.list_path}"

    def parse_color_scheme(self, body: str) -> ColorScheme:
        return self.format.parse(body)


async def _join_all(coroutines: list) -> list:
    """Run coroutines concurrently; on the first failure cancel the rest and re-raise.

    Returns only once every task has finished, so callers never overlap batches.
    """
    tasks = [asyncio.ensure_future(coroutine) for coroutine in coroutines]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
