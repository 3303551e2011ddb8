import os
from functools import lru_cache
from pathlib import Path


@lru_cache
def _resolve_config_dir() -> Path:
    """Resolve the base directory for ccc user data."""
    env_dir = os.getenv("CCC_CONFIG_DIR")
    if env_dir:
        return Path(env_dir).expanduser()
    return Path.home() / ".ccc"


def get_config_dir() -> Path:
    """Get the user config directory path."""
    return _resolve_config_dir()


def get_storage_dir() -> Path:
    """Directory holding the per-project `.claude` trees created by `ccc setup`."""
    return get_config_dir() / "storage"


def get_system_resources_dir() -> Path:
    """Bundled base-tier resources shipped inside the package."""
    return Path(__file__).parent / "resources"
