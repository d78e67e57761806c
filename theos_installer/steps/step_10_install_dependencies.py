from __future__ import annotations

import logging

from ..errors import DependencyInstallError
from ..lib.command import CommandError
from ..lib.pkg import apt_install, apt_update
from ..lib.platform_info import Distro
from ..pipeline import InstallCtx

logger = logging.getLogger(__name__)


class InstallDependenciesStep:
    step_id = "10_install_dependencies"

    def run(self, ctx: InstallCtx) -> bool:
        packages = ctx.cfg.debian_packages

        if ctx.platform.distro is not Distro.KNOWN:
            # Advisory only: we can't drive an unknown package manager.
            logger.warning(
                "Unrecognized distribution %r; make sure these (or equivalent) packages are installed: %s",
                ctx.platform.distro_id,
                " ".join(packages),
            )
            return False

        try:
            apt_update()
            apt_install(packages)
        except CommandError as e:
            raise DependencyInstallError(f"Dependency installation failed: {e}") from e

        logger.info("Dependencies installed: %s", " ".join(packages))
        return True
