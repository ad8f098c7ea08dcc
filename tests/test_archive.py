import zipfile
from pathlib import Path

import pytest

from site_dump.archive import ArchiveError, create_zip_archive


def _populate(root: Path) -> None:
    (root / "images").mkdir(parents=True)
    (root / "example.com-content.txt").write_text("==== PAGE: Home ====\nHello", encoding="utf-8")
    (root / "images" / "image_A.png").write_bytes(bytes(range(256)) * 4)


def test_archive_round_trip(tmp_path):
    source = tmp_path / "crawl"
    _populate(source)
    archive_path = tmp_path / "crawl.zip"

    size = create_zip_archive(source, archive_path)
    assert size == archive_path.stat().st_size

    extracted = tmp_path / "extracted"
    with zipfile.ZipFile(archive_path) as archive:
        assert archive.testzip() is None
        archive.extractall(extracted)

    for original in source.rglob("*"):
        if original.is_file():
            copy = extracted / original.relative_to(source)
            assert copy.read_bytes() == original.read_bytes()


def test_archive_entries_are_relative_and_compressed(tmp_path):
    source = tmp_path / "crawl"
    _populate(source)
    archive_path = tmp_path / "crawl.zip"
    create_zip_archive(source, archive_path)

    with zipfile.ZipFile(archive_path) as archive:
        names = archive.namelist()
        assert "example.com-content.txt" in names
        assert "images/image_A.png" in names
        info = archive.getinfo("images/image_A.png")
        assert info.compress_type == zipfile.ZIP_DEFLATED


def test_archive_inside_source_is_not_self_included(tmp_path):
    source = tmp_path / "crawl"
    _populate(source)
    archive_path = source / "output.zip"
    create_zip_archive(source, archive_path)
    with zipfile.ZipFile(archive_path) as archive:
        assert "output.zip" not in archive.namelist()


def test_vanished_file_is_skipped(tmp_path, monkeypatch):
    source = tmp_path / "crawl"
    _populate(source)
    original_write = zipfile.ZipFile.write

    def flaky_write(self, filename, arcname=None, *args, **kwargs):
        if str(filename).endswith("image_A.png"):
            raise FileNotFoundError(filename)
        return original_write(self, filename, arcname, *args, **kwargs)

    monkeypatch.setattr(zipfile.ZipFile, "write", flaky_write)
    archive_path = tmp_path / "crawl.zip"
    create_zip_archive(source, archive_path)

    with zipfile.ZipFile(archive_path) as archive:
        assert "example.com-content.txt" in archive.namelist()
        assert "images/image_A.png" not in archive.namelist()


def test_other_errors_fail_the_archive(tmp_path, monkeypatch):
    source = tmp_path / "crawl"
    _populate(source)

    def broken_write(self, *args, **kwargs):
        raise PermissionError("denied")

    monkeypatch.setattr(zipfile.ZipFile, "write", broken_write)
    archive_path = tmp_path / "crawl.zip"
    with pytest.raises(ArchiveError):
        create_zip_archive(source, archive_path)
    assert not archive_path.exists()


def test_missing_source_directory(tmp_path):
    with pytest.raises(ArchiveError):
        create_zip_archive(tmp_path / "nope", tmp_path / "nope.zip")
