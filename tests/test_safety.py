"""Test the filesystem-root guard."""
import pytest

from kmuc_hoster.core.errors import KmucError, UnsafeDirectoryError
from kmuc_hoster.core.safety import ensure_safe_directory, is_filesystem_root


@pytest.mark.parametrize("path", ["/", "C:\\", "C:/"])
def test_roots_are_detected(path):
    assert is_filesystem_root(path) is True


def test_project_directory_is_not_root(tmp_path):
    assert is_filesystem_root(tmp_path) is False
    assert is_filesystem_root(tmp_path / "nested" / "dir") is False


def test_ensure_safe_directory_returns_resolved_path(tmp_path):
    assert ensure_safe_directory(str(tmp_path)) == tmp_path.resolve()


def test_ensure_safe_directory_rejects_root():
    with pytest.raises(UnsafeDirectoryError) as exc_info:
        ensure_safe_directory("/")

    assert exc_info.value.path == "/"
    assert "filesystem root" in str(exc_info.value)
    assert isinstance(exc_info.value, KmucError)


def test_relative_path_resolving_to_root_is_rejected(monkeypatch):
    monkeypatch.chdir("/")
    with pytest.raises(UnsafeDirectoryError):
        ensure_safe_directory(".")
