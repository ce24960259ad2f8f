"""
AtlasIT - Global Settings & Logging.
"""
import os
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Define a library-specific logger
logger = logging.getLogger("atlasit")
logger.addHandler(logging.NullHandler()) # Default to silence unless configured

# Environment Variable Names
ENV_DATA_ROOT = "ATLASIT_DATA_ROOT"
ENV_CACHE_DIR = "ATLASIT_CACHE_DIR"

class Settings:
    _instance = None
    
    def __init__(self):
        # Picks up a local .env without overriding the real environment
        load_dotenv(override=False)

        # Base for relative source paths: a directory or an http(s) URL
        self.data_root: str = os.getenv(ENV_DATA_ROOT) or str(Path.cwd())
        
        # Default cache location
        env_cache = os.getenv(ENV_CACHE_DIR)
        if env_cache:
            self.cache_dir = Path(env_cache)
        else:
            self.cache_dir = Path.cwd() / ".atlasit_cache"

    @classmethod
    def _get_instance(cls):
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls):
        """Drops the cached instance so the environment is read again."""
        cls._instance = None

    @classmethod
    def get_data_root(cls) -> str:
        return cls._get_instance().data_root

    @classmethod
    def set_data_root(cls, root: str):
        inst = cls._get_instance()
        inst.data_root = str(root)

    @classmethod
    def get_cache_dir(cls) -> Path:
        inst = cls._get_instance()
        # Ensure dir exists when requested
        inst.cache_dir.mkdir(parents=True, exist_ok=True)
        return inst.cache_dir

# --- Public Helpers (Exposed in __init__.py) ---

def get_data_root() -> str:
    """Retrieves the directory or URL the catalog paths are resolved against."""
    return Settings.get_data_root()

def resolve_data_root(data_root: Optional[str]) -> str:
    """Return an explicit data_root or fall back to Settings/env."""
    return data_root or get_data_root()

def set_data_root(root: str):
    """Sets the data root for all subsequent loads."""
    Settings.set_data_root(root)

def get_cache_dir() -> Path:
    """Retrieves the current cache directory path."""
    return Settings.get_cache_dir()

def configure_logging(level: int = logging.INFO):
    """Enable console logging for the library (idempotent)."""
    # Check if a StreamHandler is already attached to avoid duplicates
    has_stream = any(isinstance(h, logging.StreamHandler) for h in logger.handlers)
    
    if not has_stream:
        handler = logging.StreamHandler()
        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        
    logger.setLevel(level)
