from __future__ import annotations

import logging
import os
import tarfile
import urllib.error

from ..errors import ToolchainInstallError
from ..lib.fetch import download, extract_tar
from ..lib.pkg import apt_install
from ..lib.platform_info import Distro
from ..pipeline import InstallCtx, dir_has_entries, ensure_resource

logger = logging.getLogger(__name__)

SWIFT_QUESTION = "Do you want to install the Swift toolchain (larger download)?"


class InstallToolchainStep:
    step_id = "40_install_toolchain"

    def _compiler_ok(self, ctx: InstallCtx) -> bool:
        exe = ctx.compiler_path
        return exe.is_file() and os.access(exe, os.X_OK)

    def _install_standard(self, ctx: InstallCtx) -> None:
        extra = ctx.cfg.toolchain_extra_package
        if extra and ctx.platform.distro is Distro.KNOWN:
            apt_install([extra], check=False)

        url = ctx.cfg.toolchain_url.format(machine=ctx.platform.machine)
        archive = ctx.require_root() / url.rsplit("/", 1)[-1]
        try:
            download(url, archive)
            extract_tar(archive, ctx.toolchain_dir)
        except (urllib.error.URLError, tarfile.TarError, OSError) as e:
            raise ToolchainInstallError(f"Toolchain download/extract failed: {e}") from e
        finally:
            archive.unlink(missing_ok=True)

        if not self._compiler_ok(ctx):
            raise ToolchainInstallError(f"Toolchain extracted but {ctx.compiler_path} is missing or not executable")

    def run(self, ctx: InstallCtx) -> bool:
        def acquire() -> None:
            # Under CI ctx.decisions is a FixedAnswer(False).
            if ctx.decisions.confirm(SWIFT_QUESTION):
                raise ToolchainInstallError("The Swift toolchain is not supported yet")
            self._install_standard(ctx)

        return ensure_resource(
            f"toolchain ({ctx.toolchain_tree})",
            is_present=lambda: dir_has_entries(ctx.toolchain_tree),
            acquire=acquire,
        )
