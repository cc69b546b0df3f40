"""Tests for catalog providers: URLs, caching and batched downloads."""

import asyncio

import pytest

from colortty.color import Color
from colortty.errors import HttpGetError, ParseJsonError, UnknownProvider, XMLParseError
from colortty.parsers import ColorSchemeFormat
from colortty.provider import Provider


def gogh_script(index: int) -> str:
    return f'export BACKGROUND_COLOR="#0000{index:02x}"\n'


class StubCatalogClient:
    """Fake catalog client that records requests and peak concurrency."""

    def __init__(self, listing, files, delay=0.01, failing=()):
        self.listing = listing
        self.files = files
        self.delay = delay
        self.failing = set(failing)
        self.json_requests = []
        self.text_requests = []
        self.in_flight = 0
        self.peak = 0

    async def get_json(self, url):
        self.json_requests.append(url)
        return self.listing

    async def get_text(self, url):
        self.text_requests.append(url)
        self.in_flight += 1
        self.peak = max(self.peak, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
            filename = url.rsplit("/", 1)[1]
            if filename in self.failing:
                raise HttpGetError(f"Received non-success status code 500 from {url}")
            return self.files[filename]
        finally:
            self.in_flight -= 1


@pytest.fixture
def gogh_catalog():
    files = {f"theme{i:02d}.sh": gogh_script(i) for i in range(23)}
    listing = [{"name": filename, "type": "file"} for filename in files]
    listing += [{"name": "_base.sh"}, {"name": "README.md"}, {"name": "apply-colors.txt"}]
    return listing, files


def make_gogh(tmp_path, client, **kwargs) -> Provider:
    return Provider.gogh(cache_root=tmp_path, client=client, **kwargs)


class TestProviderMetadata:

    def test_iterm_urls(self, tmp_path):
        provider = Provider.iterm(cache_root=tmp_path, client=None)
        assert provider.list_url() == (
            "https://api.github.com/repos/mbadolato/iTerm2-Color-Schemes/contents/schemes"
        )
        assert provider.individual_url("Dracula") == (
            "https://raw.githubusercontent.com/mbadolato/iTerm2-Color-Schemes/master/"
            "schemes/Dracula.itermcolors"
        )
        assert provider.format is ColorSchemeFormat.ITERM

    def test_gogh_urls(self, tmp_path):
        provider = Provider.gogh(cache_root=tmp_path, client=None, branch="main")
        assert provider.list_url() == "https://api.github.com/repos/Gogh-Co/Gogh/contents/themes"
        assert provider.individual_url("Dracula") == (
            "https://raw.githubusercontent.com/Gogh-Co/Gogh/main/themes/Dracula.sh"
        )
        assert provider.format is ColorSchemeFormat.GOGH

    def test_cache_locations(self, tmp_path):
        provider = Provider.iterm(cache_root=tmp_path, client=None)
        assert provider.repo_dir == tmp_path / "repositories" / "mbadolato" / "iTerm2-Color-Schemes"
        assert provider.individual_path("Dracula") == provider.repo_dir / "Dracula.itermcolors"

    def test_from_name(self, tmp_path):
        provider = Provider.from_name("gogh", cache_root=tmp_path, client=None)
        assert provider.repo_name == "Gogh"

    def test_unknown_provider(self, tmp_path):
        with pytest.raises(UnknownProvider):
            Provider.from_name("base16", cache_root=tmp_path, client=None)

    def test_invalid_concurrency(self, tmp_path):
        with pytest.raises(ValueError):
            Provider.gogh(cache_root=tmp_path, client=None, max_concurrency=0)


class TestDownloadAll:

    async def test_bounded_concurrency(self, tmp_path, gogh_catalog):
        listing, files = gogh_catalog
        client = StubCatalogClient(listing, files)
        provider = make_gogh(tmp_path, client)

        await provider.download_all()

        assert client.peak == 10
        assert len(client.text_requests) == 23
        assert client.in_flight == 0

    async def test_custom_batch_size(self, tmp_path, gogh_catalog):
        listing, files = gogh_catalog
        client = StubCatalogClient(listing, files)
        provider = make_gogh(tmp_path, client, max_concurrency=4)

        await provider.download_all()

        assert client.peak == 4

    async def test_filters_listing(self, tmp_path, gogh_catalog):
        listing, files = gogh_catalog
        client = StubCatalogClient(listing, files)
        provider = make_gogh(tmp_path, client)

        await provider.download_all()

        cached = sorted(path.name for path in provider.repo_dir.iterdir())
        assert cached == sorted(files)
        assert not any("_base" in url or "README" in url for url in client.text_requests)

    async def test_writes_file_contents(self, tmp_path, gogh_catalog):
        listing, files = gogh_catalog
        provider = make_gogh(tmp_path, StubCatalogClient(listing, files))

        await provider.download_all()

        assert provider.individual_path("theme07").read_text() == gogh_script(7)

    async def test_failure_stops_later_batches(self, tmp_path, gogh_catalog):
        listing, files = gogh_catalog
        client = StubCatalogClient(listing, files, failing={"theme12.sh"})
        provider = make_gogh(tmp_path, client)

        with pytest.raises(HttpGetError) as excinfo:
            await provider.download_all()

        assert "theme12" in str(excinfo.value)
        assert client.in_flight == 0
        # The first batch is kept; the third batch never starts.
        assert provider.individual_path("theme00").exists()
        assert len(client.text_requests) == 20

    async def test_malformed_listing(self, tmp_path):
        client = StubCatalogClient({"message": "Not Found"}, {})
        provider = make_gogh(tmp_path, client)

        with pytest.raises(ParseJsonError):
            await provider.download_all()


class TestListAndGet:

    async def test_list_downloads_when_cache_is_empty(self, tmp_path, gogh_catalog):
        listing, files = gogh_catalog
        client = StubCatalogClient(listing, files)
        provider = make_gogh(tmp_path, client)

        schemes = await provider.list()

        assert [name for name, _ in schemes] == [f"theme{i:02d}" for i in range(23)]
        assert schemes[5][1].background == Color(0, 0, 5)
        assert len(client.json_requests) == 1

    async def test_list_reads_existing_cache(self, tmp_path, gogh_catalog):
        listing, files = gogh_catalog
        await make_gogh(tmp_path, StubCatalogClient(listing, files)).download_all()

        client = StubCatalogClient(listing, files)
        schemes = await make_gogh(tmp_path, client).list()

        assert len(schemes) == 23
        assert client.json_requests == []
        assert client.text_requests == []

    async def test_update_refreshes_cache(self, tmp_path, gogh_catalog):
        listing, files = gogh_catalog
        await make_gogh(tmp_path, StubCatalogClient(listing, files)).download_all()

        files = dict(files, **{"theme00.sh": 'export BACKGROUND_COLOR="#ffffff"\n'})
        client = StubCatalogClient(listing, files)
        schemes = await make_gogh(tmp_path, client).update()

        assert dict(schemes)["theme00"].background == Color(255, 255, 255)
        assert len(client.text_requests) == 23

    async def test_list_fails_on_unparsable_cache_entry(self, tmp_path):
        provider = Provider.iterm(cache_root=tmp_path, client=StubCatalogClient([], {}))
        provider.repo_dir.mkdir(parents=True)
        provider.individual_path("Broken").write_text("<plist><dict>")

        with pytest.raises(XMLParseError):
            await provider.list()

    async def test_get_bypasses_cache(self, tmp_path, iterm_source):
        client = StubCatalogClient([], {"Dracula.itermcolors": iterm_source})
        provider = Provider.iterm(cache_root=tmp_path, client=client)

        scheme = await provider.get("Dracula")

        assert scheme.background == Color(31, 31, 31)
        assert client.text_requests == [provider.individual_url("Dracula")]
        assert not provider.repo_dir.exists()

    async def test_get_missing_scheme(self, tmp_path):
        client = StubCatalogClient([], {"Nope.sh": ""}, failing={"Nope.sh"})
        provider = make_gogh(tmp_path, client)

        with pytest.raises(HttpGetError) as excinfo:
            await provider.get("Nope")

        assert "Nope" in str(excinfo.value)
