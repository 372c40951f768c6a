"""Helpers for locating files in the user's cache directory."""

from pathlib import Path

from xdg.BaseDirectory import save_cache_path as x_save_cache_path  # type: ignore
from xdg.BaseDirectory import xdg_cache_home  # type: ignore

app = "hostinspect"


def cache_path(*args: str) -> Path:
    """Returns a path below the application's cache directory.

    Unlike `save_cache_path` nothing is created on disk.

    Args:
        *args: The path components to join to the cache directory.
    """
    return Path(xdg_cache_home, app).joinpath(*args)


def save_cache_path(*args: str) -> Path:
    """Returns a path to a file in the user's cache directory.

    The application's cache directory is created if needed.

    Args:
        *args: The path components to join to the cache directory.

    Returns:
        A `Path` object representing the full path to the file.
    """
    return Path(x_save_cache_path(app)).joinpath(*args)
