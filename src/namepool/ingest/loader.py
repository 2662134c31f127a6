"""
Loading plumbing: obtain raw CSV text from a file, a URL or an in-memory
string and hand it to a PoolStore. Nothing here raises to the caller.
"""

import logging
from pathlib import Path
from typing import Optional, Union

import httpx

from namepool.ingest.pool_builder import PoolStore

logger = logging.getLogger(__name__)

DEFAULT_DATA_PATH = Path("./data/result.csv")
HTTP_TIMEOUT = 30.0
HTTP_HEADERS = {"Cache-Control": "no-cache"}

Source = Union[str, bytes, Path]


def is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def read_text_file(path: Union[str, Path]) -> Optional[str]:
    """
    Read a UTF-8 text file.

    Args:
        path: File to read

    Returns:
        File contents, or None if the file is missing or unreadable
    """
    path = Path(path)
    logger.debug(f"Reading name data file: {path}")
    if not path.is_file():
        logger.debug(f"No name data file at {path}")
        return None
    try:
        with open(path, "r", encoding="utf-8-sig") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Failed to read {path}: {e}")
        return None


def _response_text(url: str, response: httpx.Response) -> Optional[str]:
    if not response.is_success:
        logger.warning(f"Fetching {url} returned HTTP {response.status_code}")
        return None
    return response.text


def fetch_text(url: str, client: Optional[httpx.Client] = None) -> Optional[str]:
    """
    Fetch CSV text over HTTP.

    Args:
        url: Resource to fetch
        client: Optional pre-configured httpx client

    Returns:
        Response body, or None on any HTTP or transport failure
    """
    logger.debug(f"Fetching name data from URL: {url}")
    try:
        if client is not None:
            return _response_text(url, client.get(url, headers=HTTP_HEADERS))
        with httpx.Client(timeout=HTTP_TIMEOUT) as owned:
            return _response_text(url, owned.get(url, headers=HTTP_HEADERS))
    except httpx.HTTPError as e:
        logger.warning(f"Fetch failed for {url}: {e}")
        return None


async def fetch_text_async(url: str, client: Optional[httpx.AsyncClient] = None) -> Optional[str]:
    """Awaitable twin of fetch_text."""
    logger.debug(f"Fetching name data from URL: {url}")
    try:
        if client is not None:
            return _response_text(url, await client.get(url, headers=HTTP_HEADERS))
        async with httpx.AsyncClient(timeout=HTTP_TIMEOUT) as owned:
            return _response_text(url, await owned.get(url, headers=HTTP_HEADERS))
    except httpx.HTTPError as e:
        logger.warning(f"Fetch failed for {url}: {e}")
        return None


def build_pools_from_file(store: PoolStore, path: Union[str, Path] = DEFAULT_DATA_PATH) -> bool:
    text = read_text_file(path)
    if text is None:
        return False
    return store.ingest(text)


def build_pools_from_url(store: PoolStore, url: str, client: Optional[httpx.Client] = None) -> bool:
    text = fetch_text(url, client)
    if not text:
        return False
    return store.ingest(text)


def preload_name_pools(store: PoolStore, source: Source,
                       client: Optional[httpx.Client] = None) -> bool:
    """
    Build pools from whatever the caller has at hand.

    Args:
        store: Pool store to rebuild
        source: Raw bytes, CSV text (anything containing a newline),
            an http(s) URL, or a file path
        client: Optional httpx client for URL sources

    Returns:
        True if the pools were rebuilt
    """
    logger.debug(f"preload_name_pools called with source type: {type(source).__name__}")
    if isinstance(source, bytes):
        return store.ingest(source)
    if isinstance(source, Path):
        return build_pools_from_file(store, source)
    if isinstance(source, str):
        if "\n" in source:
            logger.debug(f"Parsing CSV text source, length={len(source)}")
            return store.ingest(source)
        if is_url(source):
            return build_pools_from_url(store, source, client)
        return build_pools_from_file(store, source)
    logger.warning(f"Unsupported name data source: {type(source).__name__}")
    return False


async def preload_name_pools_async(store: PoolStore, source: Source,
                                   client: Optional[httpx.AsyncClient] = None) -> bool:
    """Awaitable twin of preload_name_pools; only URL sources actually await."""
    if isinstance(source, str) and "\n" not in source and is_url(source):
        text = await fetch_text_async(source, client)
        if not text:
            return False
        return store.ingest(text)
    return preload_name_pools(store, source)
