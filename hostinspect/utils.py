"""Small helpers shared by the report and command line code."""

import os
import time
from pathlib import Path
from shutil import move
from tempfile import mkstemp

if os.getenv("COLOR", "always") == "always":

    def green(xs: str) -> str:
        """Wraps a string in ANSI escape codes to make it green."""
        return "\033[1;32m{!s}\033[1;m\033[0m".format(xs)

    def red(xs: str) -> str:
        """Wraps a string in ANSI escape codes to make it red."""
        return "\033[1;31m{!s}\033[1;m\033[0m".format(xs)

    def yellow(xs: str) -> str:
        """Wraps a string in ANSI escape codes to make it yellow."""
        return "\033[1;33m{!s}\033[1;m\033[0m".format(xs)

    def blue(xs: str) -> str:
        """Wraps a string in ANSI escape codes to make it blue."""
        return "\033[1;34m{!s}\033[1;m\033[0m".format(xs)

else:
    green = red = yellow = blue = lambda xs: str(xs)


def timestamp() -> str:
    """Gets the local time in a form usable in file names."""
    return time.strftime("%Y%m%d-%H%M%S")


def atomic_write_file(data: bytes | str, path: Path) -> None:
    """Atomically writes data to a file.

    Args:
        data: The data to write, as bytes or a string.
        path: The path to the file.
    """
    if isinstance(data, bytes):
        data = data.decode("utf-8")
    fd, fname = mkstemp(dir=path.parent)

    with os.fdopen(fd, "w") as f:
        f.write(data)

    move(fname, path)
