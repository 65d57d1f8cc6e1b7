from __future__ import annotations

import io
import zipfile
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from types import MappingProxyType

import httpx
import pytest

from addon_creator.host import AppRegistry, ApplicationVariant

BOILERPLATE_URL = "https://example.test/boilerplate/master.zip"
ARCHIVE_ROOT = "clone-test-master"

type ArchiveFactory = Callable[..., bytes]
type VariantInstaller = Callable[..., Path]


@pytest.fixture
def make_archive() -> ArchiveFactory:
    def build(root: str = ARCHIVE_ROOT, files: Mapping[str, str] | None = None) -> bytes:
        files = files or {"package.json": '{"name": "boilerplate"}\n', "src/index.js": "module.exports = {};\n"}
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w") as bundle:
            bundle.writestr(f"{root}/", "")
            for relative, content in files.items():
                bundle.writestr(f"{root}/{relative}", content)
        return buffer.getvalue()

    return build


@pytest.fixture
def boilerplate_zip(make_archive: ArchiveFactory) -> bytes:
    return make_archive()


@pytest.fixture
def support_dir(tmp_path: Path) -> Path:
    return tmp_path / "support"


@pytest.fixture
def registry(support_dir: Path) -> AppRegistry:
    return AppRegistry(
        app_names=MappingProxyType({ApplicationVariant.PRIMARY: "Local", ApplicationVariant.BETA: "Local Beta"}),
        install_dirs=MappingProxyType(
            {
                ApplicationVariant.PRIMARY: support_dir / "Local",
                ApplicationVariant.BETA: support_dir / "Local Beta",
            }
        ),
        boilerplate_url=BOILERPLATE_URL,
        archive_root=ARCHIVE_ROOT,
        download_timeout=5.0,
    )


@pytest.fixture
def install_variant(registry: AppRegistry) -> VariantInstaller:
    def install(variant: ApplicationVariant, addons: Iterable[str] = ()) -> Path:
        addons_dir = registry.addons_dir(variant)
        addons_dir.mkdir(parents=True, exist_ok=True)
        for addon in addons:
            (addons_dir / addon).mkdir()
        return addons_dir

    return install


@pytest.fixture
def served_requests() -> list[httpx.Request]:
    return []


@pytest.fixture
def boilerplate_transport(boilerplate_zip: bytes, served_requests: list[httpx.Request]) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        served_requests.append(request)
        return httpx.Response(200, content=boilerplate_zip, headers={"content-type": "application/zip"})

    return httpx.MockTransport(handler)
