"""
Tests for the protected files storage.
"""
import io

import pytest

from core.exceptions import BadRequestError, NotFoundError
from repositories.file_storage import FileStorageRepository, sanitize_filename


@pytest.fixture
def storage(tmp_path):
    return FileStorageRepository(tmp_path / "files")


@pytest.mark.parametrize("raw, expected", [
    ("report.pdf", "report.pdf"),
    ("../../etc/passwd", "passwd"),
    ("C:\\Users\\me\\notes.txt", "C_Users_me_notes.txt"),
    ("my file (1).txt", "my_file_1_.txt"),
])
def test_sanitize_filename(raw, expected):
    assert sanitize_filename(raw) == expected


@pytest.mark.parametrize("raw", [None, "", "..", "///"])
def test_sanitize_filename_rejects_empty_names(raw):
    with pytest.raises(BadRequestError):
        sanitize_filename(raw)


def test_save_creates_root(storage):
    path = storage.save("a.txt", io.BytesIO(b"hello"))

    assert path.read_bytes() == b"hello"
    assert storage.list_files() == [path]


def test_list_skips_hidden_files(storage):
    storage.ensure_root()
    (storage.root / ".gitkeep").write_text("")

    assert storage.list_files() == []


def test_delete_rejects_traversal(storage):
    storage.ensure_root()

    with pytest.raises(BadRequestError):
        storage.delete("../outside.txt")


def test_delete_missing(storage):
    storage.ensure_root()

    with pytest.raises(NotFoundError):
        storage.delete("ghost.txt")
