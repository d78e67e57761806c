from __future__ import annotations

import logging
from typing import Sequence

from .command import run_cmd

logger = logging.getLogger(__name__)


def apt_update() -> None:
    run_cmd(["sudo", "apt-get", "update"], capture=False)


def apt_install(packages: Sequence[str], *, check: bool = True) -> bool:
    """Install host packages with apt-get.

    Returns True on success. With check=False a failure is logged and False is
    returned instead of raising.
    """
    if not packages:
        return True
    r = run_cmd(
        ["sudo", "apt-get", "install", "-y", *packages],
        check=check,
        capture=False,
    )
    if r.returncode != 0:
        logger.warning("apt-get install failed (%s): %s", r.returncode, " ".join(packages))
        return False
    return True
