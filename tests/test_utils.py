from pathlib import Path
from unittest.mock import patch

from hostinspect import xdg
from hostinspect.utils import atomic_write_file, timestamp


def test_atomic_write_file(tmp_path):
    path = tmp_path / "report.yml"
    path.write_text("old")

    atomic_write_file("new", path)
    assert path.read_text() == "new"

    atomic_write_file(b"bytes", path)
    assert path.read_text() == "bytes"
    assert [p.name for p in tmp_path.iterdir()] == ["report.yml"]


def test_timestamp():
    stamp = timestamp()
    assert len(stamp) == 15
    assert stamp[8] == "-"


@patch("hostinspect.xdg.x_save_cache_path", return_value="/tmp/cache")
def test_save_cache_path(mock_save_cache_path):
    """
    Test save_cache_path
    """
    path = xdg.save_cache_path("reports", "file")
    assert path == Path("/tmp/cache/reports/file")
    mock_save_cache_path.assert_called_once_with("hostinspect")


@patch("hostinspect.xdg.xdg_cache_home", "/tmp/cachehome")
def test_cache_path():
    assert xdg.cache_path("reports") == Path("/tmp/cachehome/hostinspect/reports")
