import io
import logging
import os
import tarfile
from pathlib import Path
from typing import Dict, List

import pytest

from theos_installer.install_config import InstallConfig
from theos_installer.lib.command import CmdResult, CommandError
from theos_installer.lib.platform_info import Distro, PlatformInfo
from theos_installer.lib.prompt import FixedAnswer
from theos_installer.lib.shell_profile import Dialect, ShellProfile
from theos_installer.pipeline import InstallCtx

LINUX_DEBIAN = PlatformInfo(os_family="Linux", distro=Distro.KNOWN, distro_id="debian", machine="x86_64")


def _mentions(argv, program: str) -> bool:
    return any(a == program or a.endswith("/" + program) for a in argv)


class FakeRunner:
    """Stand-in for run_cmd: records argv and returns canned exit codes."""

    def __init__(self):
        self.calls: List[List[str]] = []
        self.envs: List[Dict[str, str]] = []
        self.fail: Dict[str, int] = {}
        self.on_call = None

    def __call__(self, argv, *, check=True, env=None, cwd=None, capture=True):
        argv = list(argv)
        self.calls.append(argv)
        self.envs.append(dict(env or {}))
        if self.on_call is not None:
            self.on_call(argv)
        code = next((rc for key, rc in self.fail.items() if _mentions(argv, key)), 0)
        result = CmdResult(argv=argv, returncode=code, stdout="", stderr="boom" if code else "")
        if check and code != 0:
            raise CommandError(result)
        return result

    def ran(self, program: str) -> bool:
        return any(_mentions(argv, program) for argv in self.calls)


@pytest.fixture
def runner(monkeypatch):
    fake = FakeRunner()
    monkeypatch.setattr("theos_installer.lib.pkg.run_cmd", fake)
    monkeypatch.setattr("theos_installer.steps.step_30_sync_repository.run_cmd", fake)
    return fake


@pytest.fixture
def home(tmp_path: Path) -> Path:
    h = tmp_path / "home"
    h.mkdir()
    return h


@pytest.fixture
def make_ctx(home: Path):
    def _make(**kw) -> InstallCtx:
        defaults = dict(
            cfg=InstallConfig({"default_root": str(home / "theos")}),
            platform=LINUX_DEBIAN,
            shell_profile=ShellProfile(Dialect.POSIX, "bash", home / ".bashrc"),
            decisions=FixedAnswer(False),
            environ={},
        )
        defaults.update(kw)
        return InstallCtx(**defaults)

    return _make


def make_tarball(path: Path, files: Dict[str, bytes], *, mode: int = 0o644) -> Path:
    """Write a gzipped tarball; names ending in '/' become directories."""

    with tarfile.open(path, "w:gz") as tar:
        for name, data in files.items():
            info = tarfile.TarInfo(name.rstrip("/"))
            if name.endswith("/"):
                info.type = tarfile.DIRTYPE
                info.mode = 0o755
                tar.addfile(info)
                continue
            info.size = len(data)
            info.mode = mode
            tar.addfile(info, io.BytesIO(data))
    return path


class FakeDownload:
    """Serves a prepared tarball instead of hitting the network."""

    def __init__(self, source: Path):
        self.source = source
        self.urls: List[str] = []

    def __call__(self, url: str, dest: Path) -> Path:
        self.urls.append(url)
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_bytes(self.source.read_bytes())
        return dest


@pytest.fixture
def tarball():
    return make_tarball


@pytest.fixture
def serve_tarball(monkeypatch):
    """Patch download() in the given step module to serve a local tarball."""

    def _serve(module: str, source: Path) -> FakeDownload:
        fake = FakeDownload(source)
        monkeypatch.setattr(f"{module}.download", fake)
        return fake

    return _serve


@pytest.fixture
def truncated_xz():
    """Write a .tar.xz whose compressed stream is cut off mid-member."""

    def _make(path: Path, member: str = "payload.bin") -> Path:
        data = os.urandom(256 * 1024)
        with tarfile.open(path, "w:xz") as tar:
            info = tarfile.TarInfo(member)
            info.size = len(data)
            tar.addfile(info, io.BytesIO(data))
        blob = path.read_bytes()
        path.write_bytes(blob[: len(blob) // 2])
        return path

    return _make


@pytest.fixture
def clean_root_logger():
    root = logging.getLogger()
    saved = list(root.handlers)
    yield root
    for h in list(root.handlers):
        if h not in saved:
            root.removeHandler(h)
            h.close()
    for attr in ("_theos_installer_configured", "_theos_installer_log_path"):
        if hasattr(root, attr):
            delattr(root, attr)
