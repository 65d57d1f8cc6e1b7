from __future__ import annotations

import zipfile
from pathlib import Path
from unittest.mock import patch

import httpx
import pytest
from result import is_err, is_ok

from addon_creator.addon import (
    AddonLayoutError,
    BoilerplateArchiveError,
    BoilerplateDownloadError,
    BoilerplateFetcher,
)
from addon_creator.host import AppRegistry


@pytest.fixture
def destination(tmp_path: Path) -> Path:
    path = tmp_path / "workspace"
    path.mkdir()
    return path


@pytest.fixture
def fetcher(registry: AppRegistry, boilerplate_transport: httpx.MockTransport) -> BoilerplateFetcher:
    return BoilerplateFetcher(registry, transport=boilerplate_transport)


def _fetcher_with(registry: AppRegistry, handler) -> BoilerplateFetcher:
    return BoilerplateFetcher(registry, transport=httpx.MockTransport(handler))


class TestDownload:
    def test_writes_archive_into_destination(
        self,
        fetcher: BoilerplateFetcher,
        destination: Path,
        boilerplate_zip: bytes,
        served_requests: list[httpx.Request],
    ) -> None:
        result = fetcher.download(destination)

        assert is_ok(result)
        archive = result.unwrap()
        assert archive == destination / "boilerplate.zip"
        assert archive.read_bytes() == boilerplate_zip
        assert [str(request.url) for request in served_requests] == ["https://example.test/boilerplate/master.zip"]

    def test_follows_redirects(self, registry: AppRegistry, destination: Path, boilerplate_zip: bytes) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.host == "example.test":
                return httpx.Response(302, headers={"location": "https://codeload.example.test/master.zip"})
            return httpx.Response(200, content=boilerplate_zip)

        result = _fetcher_with(registry, handler).download(destination)

        assert result.unwrap().read_bytes() == boilerplate_zip

    def test_http_error_status_is_reported(self, registry: AppRegistry, destination: Path) -> None:
        result = _fetcher_with(registry, lambda request: httpx.Response(404)).download(destination)

        assert is_err(result)
        error = result.unwrap_err()
        assert isinstance(error, BoilerplateDownloadError)
        assert error.status_code == 404
        assert error.url == registry.boilerplate_url
        assert not (destination / "boilerplate.zip").exists()

    def test_network_failure_is_reported(self, registry: AppRegistry, destination: Path) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        result = _fetcher_with(registry, handler).download(destination)

        assert is_err(result)
        error = result.unwrap_err()
        assert isinstance(error, BoilerplateDownloadError)
        assert error.status_code is None
        assert "connection refused" in error.message
        assert list(destination.iterdir()) == []

    def test_creates_missing_destination(self, fetcher: BoilerplateFetcher, tmp_path: Path) -> None:
        destination = tmp_path / "not" / "yet" / "there"

        result = fetcher.download(destination)

        assert result.unwrap().parent == destination


class TestUnpack:
    def test_extracts_and_removes_archive(
        self, fetcher: BoilerplateFetcher, destination: Path, boilerplate_zip: bytes
    ) -> None:
        archive = destination / "boilerplate.zip"
        archive.write_bytes(boilerplate_zip)

        result = fetcher.unpack(archive, destination)

        assert is_ok(result)
        extracted = result.unwrap()
        assert extracted == destination / "clone-test-master"
        assert (extracted / "package.json").is_file()
        assert (extracted / "src" / "index.js").is_file()
        assert not archive.exists()

    def test_missing_archive_is_reported(self, fetcher: BoilerplateFetcher, destination: Path) -> None:
        archive = destination / "boilerplate.zip"

        result = fetcher.unpack(archive, destination)

        assert is_err(result)
        assert isinstance(result.unwrap_err(), BoilerplateArchiveError)
        assert result.unwrap_err().archive == archive

    def test_corrupt_archive_is_removed(self, fetcher: BoilerplateFetcher, destination: Path) -> None:
        archive = destination / "boilerplate.zip"
        archive.write_bytes(b"<html>not a zip</html>")

        result = fetcher.unpack(archive, destination)

        assert is_err(result)
        assert "Could not open" in result.unwrap_err().message
        assert not archive.exists()

    def test_extraction_failure_removes_archive_and_partial_output(
        self,
        fetcher: BoilerplateFetcher,
        destination: Path,
        make_archive,
    ) -> None:
        archive = destination / "boilerplate.zip"
        archive.write_bytes(make_archive(files={"a.txt": "a", "b.txt": "b"}))
        (destination / "unrelated").mkdir()
        real_extract_member = zipfile.ZipFile._extract_member

        def extract_then_fail(self, member, targetpath, pwd):
            real_extract_member(self, member, targetpath, pwd)
            raise OSError("disk full")

        with patch.object(zipfile.ZipFile, "_extract_member", extract_then_fail):
            result = fetcher.unpack(archive, destination)

        assert is_err(result)
        error = result.unwrap_err()
        assert isinstance(error, BoilerplateArchiveError)
        assert "disk full" in error.message
        assert not archive.exists()
        assert sorted(path.name for path in destination.iterdir()) == ["unrelated"]

    def test_unsupported_compression_removes_archive_and_partial_output(
        self,
        fetcher: BoilerplateFetcher,
        destination: Path,
        make_archive,
    ) -> None:
        archive = destination / "boilerplate.zip"
        # 9 is deflate64, which zipfile cannot decompress
        archive.write_bytes(_with_compression_method(make_archive(files={"a.txt": "a"}), 9))
        (destination / "unrelated").mkdir()

        result = fetcher.unpack(archive, destination)

        assert is_err(result)
        error = result.unwrap_err()
        assert isinstance(error, BoilerplateArchiveError)
        assert "Could not unpack" in error.message
        assert not archive.exists()
        assert sorted(path.name for path in destination.iterdir()) == ["unrelated"]

    def test_encrypted_member_removes_archive_and_partial_output(
        self,
        fetcher: BoilerplateFetcher,
        destination: Path,
        make_archive,
    ) -> None:
        archive = destination / "boilerplate.zip"
        archive.write_bytes(_with_encrypted_flag(make_archive(files={"a.txt": "a"})))

        result = fetcher.unpack(archive, destination)

        assert is_err(result)
        assert isinstance(result.unwrap_err(), BoilerplateArchiveError)
        assert not archive.exists()
        assert list(destination.iterdir()) == []


class TestPlace:
    def test_renames_extracted_folder(self, fetcher: BoilerplateFetcher, destination: Path) -> None:
        extracted = destination / "clone-test-master"
        extracted.mkdir()
        (extracted / "package.json").write_text("{}")

        result = fetcher.place(extracted, "my-addon")

        assert result.unwrap() == destination / "my-addon"
        assert (destination / "my-addon" / "package.json").is_file()
        assert not extracted.exists()

    def test_existing_target_removes_extracted_folder(self, fetcher: BoilerplateFetcher, destination: Path) -> None:
        extracted = destination / "clone-test-master"
        extracted.mkdir()
        existing = destination / "my-addon"
        existing.mkdir()
        (existing / "keep.txt").write_text("mine")

        result = fetcher.place(extracted, "my-addon")

        assert is_err(result)
        error = result.unwrap_err()
        assert isinstance(error, AddonLayoutError)
        assert error.target == existing
        assert not extracted.exists()
        assert (existing / "keep.txt").read_text() == "mine"

    def test_missing_extracted_folder_is_reported(self, fetcher: BoilerplateFetcher, destination: Path) -> None:
        result = fetcher.place(destination / "clone-test-master", "my-addon")

        assert is_err(result)
        assert "was not found" in result.unwrap_err().message
        assert not (destination / "my-addon").exists()

    def test_rename_failure_removes_extracted_folder(self, fetcher: BoilerplateFetcher, destination: Path) -> None:
        extracted = destination / "clone-test-master"
        extracted.mkdir()

        with patch.object(Path, "rename", side_effect=PermissionError("denied")):
            result = fetcher.place(extracted, "my-addon")

        assert is_err(result)
        assert "denied" in result.unwrap_err().message
        assert not extracted.exists()

    def test_unusable_target_name_removes_extracted_folder(
        self, fetcher: BoilerplateFetcher, destination: Path
    ) -> None:
        extracted = destination / "clone-test-master"
        extracted.mkdir()

        result = fetcher.place(extracted, "bad\x00name")

        assert is_err(result)
        assert isinstance(result.unwrap_err(), AddonLayoutError)
        assert list(destination.iterdir()) == []


def test_materialize_leaves_only_the_addon_directory(fetcher: BoilerplateFetcher, destination: Path) -> None:
    result = fetcher.materialize(destination, "my-addon")

    assert result.unwrap() == destination / "my-addon"
    assert [path.name for path in destination.iterdir()] == ["my-addon"]
    assert (destination / "my-addon" / "src" / "index.js").is_file()


def test_materialize_stops_at_first_failure(registry: AppRegistry, destination: Path) -> None:
    fetcher = _fetcher_with(registry, lambda request: httpx.Response(500))

    result = fetcher.materialize(destination, "my-addon")

    assert isinstance(result.unwrap_err(), BoilerplateDownloadError)
    assert list(destination.iterdir()) == []


def test_materialize_with_unexpected_archive_root(
    registry: AppRegistry, destination: Path, make_archive
) -> None:
    payload = make_archive(root="renamed-upstream")
    fetcher = _fetcher_with(registry, lambda request: httpx.Response(200, content=payload))

    result = fetcher.materialize(destination, "my-addon")

    assert isinstance(result.unwrap_err(), AddonLayoutError)
    assert not (destination / "boilerplate.zip").exists()
    assert not (destination / "my-addon").exists()


def _patch_headers(payload: bytes, *, local_offset: int, central_offset: int, value: int) -> bytes:
    data = bytearray(payload)
    for signature, offset in ((b"PK\x03\x04", local_offset), (b"PK\x01\x02", central_offset)):
        start = data.find(signature)
        while start != -1:
            data[start + offset : start + offset + 2] = value.to_bytes(2, "little")
            start = data.find(signature, start + 4)
    return bytes(data)


def _with_compression_method(payload: bytes, method: int) -> bytes:
    return _patch_headers(payload, local_offset=8, central_offset=10, value=method)


def _with_encrypted_flag(payload: bytes) -> bytes:
    return _patch_headers(payload, local_offset=6, central_offset=8, value=0x1)
