"""
AtlasIT - Infrastructure Adapter for Source Files.

Reads catalog paths relative to the data root. The root is either a local
directory or an http(s) base URL; remote files go through the download
cache. Returns raw text/JSON only, parsing belongs to core.logic.
"""

import json
from pathlib import Path
from typing import Any, Optional

from atlasit.settings import logger, resolve_data_root


class SourceNotFoundError(FileNotFoundError):
    """A catalog path does not exist under the data root."""


def is_remote(location: str) -> bool:
    return location.startswith(("http://", "https://"))


def resolve_location(path: str, data_root: Optional[str] = None) -> str:
    """Joins a catalog path onto the data root (absolute paths/URLs pass through)."""
    if is_remote(path) or Path(path).is_absolute():
        return path

    root = resolve_data_root(data_root)
    if is_remote(root):
        return root.rstrip("/") + "/" + path.lstrip("/")
    return str(Path(root) / path)


def fetch_text(
    path: str,
    *,
    data_root: Optional[str] = None,
    encoding: str = "utf-8-sig",
    force: bool = False,
) -> str:
    """
    Returns the decoded content of a source file.

    Raises:
        SourceNotFoundError: the local file does not exist.
        RuntimeError: the remote download failed.
    """
    location = resolve_location(path, data_root)

    if is_remote(location):
        # Local import keeps requests off the import path of core users
        from atlasit.infra.storage.cache import cached_download
        local = cached_download(location, force=force)
    else:
        local = Path(location)
        if not local.is_file():
            logger.error(f"Source file not found: {local}")
            raise SourceNotFoundError(f"Source file not found: {local}")

    logger.info(f"    📄 Reading {location}")
    return local.read_bytes().decode(encoding, errors="replace")


def fetch_json(path: str, **kwargs) -> Any:
    """Fetches and decodes a JSON/GeoJSON source."""
    text = fetch_text(path, **kwargs)
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}") from e
