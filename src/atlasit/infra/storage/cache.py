"""AtlasIT disk cache for remote source files."""

from __future__ import annotations

import hashlib
from pathlib import Path

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from atlasit.settings import get_cache_dir, logger


def url_to_filename(url: str, *, suffix: str = "") -> str:
    """Generates a filesystem-safe filename from a URL using SHA256."""
    h = hashlib.sha256(url.encode("utf-8")).hexdigest()
    return f"{h}{suffix}"


def get_session(retries: int = 3, backoff_factor: float = 0.5) -> requests.Session:
    """Creates a requests Session with automatic retries and exponential backoff."""
    session = requests.Session()
    retry = Retry(
        total=retries,
        read=retries,
        connect=retries,
        backoff_factor=backoff_factor,
        status_forcelist=(500, 502, 503, 504),
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


def cached_download(
    url: str,
    *,
    timeout: int = 60,
    force: bool = False,
) -> Path:
    """
    Download a URL into the AtlasIT cache directory (or reuse if present).

    The file is streamed to a temporary name and renamed only once the
    download completes, so an interrupted fetch never leaves a partial
    file behind.
    """
    suffix = Path(url.split("?")[0].split("#")[0]).suffix
    out = get_cache_dir() / url_to_filename(url, suffix=suffix)

    if out.exists() and not force:
        return out

    logger.info(f"    ⬇️  Downloading: {url}")

    session = get_session()
    temp_out = out.with_suffix(out.suffix + ".tmp")

    try:
        with session.get(url, stream=True, timeout=timeout) as response:
            response.raise_for_status()
            with open(temp_out, "wb") as f:
                for chunk in response.iter_content(chunk_size=8192):
                    if chunk:
                        f.write(chunk)

        temp_out.replace(out)

    except requests.RequestException as e:
        if temp_out.exists():
            temp_out.unlink()
        raise RuntimeError(f"Failed to download {url} after retries.") from e

    return out
