"""Boilerplate download and unpacking."""

from __future__ import annotations

import shutil
import zipfile
import zlib
from pathlib import Path

import httpx
from result import Err, Ok, Result

from addon_creator.common import create_logger
from addon_creator.host import AppRegistry

from .models import (
    AddonLayoutError,
    BoilerplateArchiveError,
    BoilerplateDownloadError,
    BoilerplateError,
)

logger = create_logger("addon.boilerplate")

_CHUNK_SIZE = 64 * 1024

# NotImplementedError: unsupported compression method, RuntimeError: encrypted member
_EXTRACTION_ERRORS = (
    OSError,
    EOFError,
    NotImplementedError,
    RuntimeError,
    ValueError,
    zipfile.BadZipFile,
    zlib.error,
)

type DownloadResult = Result[Path, BoilerplateDownloadError]
type UnpackResult = Result[Path, BoilerplateArchiveError]
type PlaceResult = Result[Path, AddonLayoutError]


class BoilerplateFetcher:
    """Turns the remote boilerplate archive into a named add-on directory.

    Every step cleans up what it created before reporting a failure, so a
    failed run leaves behind at most what was already on disk.
    """

    def __init__(self, registry: AppRegistry, *, transport: httpx.BaseTransport | None = None) -> None:
        self._registry = registry
        self._transport = transport

    def materialize(self, destination_root: Path, name: str) -> Result[Path, BoilerplateError]:
        return (
            self.download(destination_root)
            .and_then(lambda archive: self.unpack(archive, destination_root))
            .and_then(lambda extracted: self.place(extracted, name))
        )

    def download(self, destination_root: Path) -> DownloadResult:
        url = self._registry.boilerplate_url
        archive = destination_root / self._registry.archive_filename
        logger.debug("Downloading boilerplate", url=url, archive=str(archive))

        try:
            destination_root.mkdir(parents=True, exist_ok=True)
            with (
                httpx.Client(
                    transport=self._transport,
                    timeout=self._registry.download_timeout,
                    follow_redirects=True,
                ) as client,
                client.stream("GET", url) as response,
            ):
                response.raise_for_status()
                with archive.open("wb") as handle:
                    for chunk in response.iter_bytes(chunk_size=_CHUNK_SIZE):
                        handle.write(chunk)
        except httpx.HTTPStatusError as exc:
            _remove_file(archive)
            status_code = exc.response.status_code
            logger.error("Boilerplate download rejected", url=url, status_code=status_code)
            return Err(
                BoilerplateDownloadError(
                    url=url,
                    status_code=status_code,
                    message=f"Server responded with HTTP {status_code}",
                )
            )
        except (httpx.HTTPError, OSError) as exc:
            _remove_file(archive)
            logger.error("Boilerplate download failed", url=url, error=str(exc))
            return Err(BoilerplateDownloadError(url=url, message=str(exc) or type(exc).__name__))

        logger.debug("Boilerplate downloaded", archive=str(archive), size=archive.stat().st_size)
        return Ok(archive)

    def unpack(self, archive: Path, destination_root: Path) -> UnpackResult:
        """Extract ``archive`` into ``destination_root`` and delete it.

        Returns the path of the archive's top-level folder.
        """
        try:
            bundle = zipfile.ZipFile(archive)
        except (OSError, zipfile.BadZipFile) as exc:
            _remove_file(archive)
            logger.error("Boilerplate archive unreadable", archive=str(archive), error=str(exc))
            return Err(
                BoilerplateArchiveError(
                    archive=archive,
                    message=f"Could not open the boilerplate archive: {exc}",
                )
            )

        with bundle:
            created = _new_top_level_entries(bundle, destination_root)
            try:
                bundle.extractall(destination_root)
            except _EXTRACTION_ERRORS as exc:
                _remove_file(archive)
                for entry in created:
                    _remove_path(entry)
                logger.error(
                    "Boilerplate extraction failed",
                    archive=str(archive),
                    removed=[str(entry) for entry in created],
                    error=str(exc),
                )
                return Err(
                    BoilerplateArchiveError(
                        archive=archive,
                        message=f"Could not unpack the boilerplate archive: {exc}",
                    )
                )

        _remove_file(archive)
        extracted = destination_root / self._registry.archive_root
        logger.debug("Boilerplate unpacked", extracted=str(extracted))
        return Ok(extracted)

    def place(self, extracted: Path, name: str) -> PlaceResult:
        target = extracted.parent / name

        def fail(reason: str) -> PlaceResult:
            _remove_path(extracted)
            logger.error("Add-on directory setup failed", source=str(extracted), target=str(target), error=reason)
            return Err(AddonLayoutError(source=extracted, target=target, message=reason))

        if not extracted.is_dir():
            return fail(f"Expected folder '{extracted.name}' was not found in the boilerplate archive")
        if target.exists() or target.is_symlink():
            return fail(f"'{target}' already exists")

        try:
            extracted.rename(target)
        except (OSError, ValueError) as exc:
            return fail(str(exc))

        logger.debug("Add-on directory created", path=str(target))
        return Ok(target)


def _new_top_level_entries(bundle: zipfile.ZipFile, destination_root: Path) -> list[Path]:
    names = {member.split("/", 1)[0] for member in bundle.namelist()}
    return [destination_root / name for name in sorted(names) if name and not (destination_root / name).exists()]


def _remove_file(path: Path) -> None:
    path.unlink(missing_ok=True)


def _remove_path(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path, ignore_errors=True)
    elif path.exists() or path.is_symlink():
        path.unlink(missing_ok=True)
