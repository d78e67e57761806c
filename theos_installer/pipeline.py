from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, MutableMapping, Optional, Protocol, Sequence

from .errors import InstallerError
from .install_config import InstallConfig
from .lib.platform_info import PlatformInfo
from .lib.prompt import DecisionSource
from .lib.shell_profile import ShellProfile

logger = logging.getLogger(__name__)


@dataclass
class InstallCtx:
    """Everything a step may look at.

    root is unset until the environment step fixes it; every install path is
    derived from it so no step holds its own copy.
    """

    cfg: InstallConfig
    platform: PlatformInfo
    shell_profile: ShellProfile
    decisions: DecisionSource
    environ: MutableMapping[str, str] = field(default_factory=lambda: os.environ)
    root: Optional[Path] = None

    def require_root(self) -> Path:
        if self.root is None:
            raise RuntimeError(f"{self.cfg.env_var} is not configured; run the environment step first")
        return self.root

    @property
    def toolchain_dir(self) -> Path:
        return self.require_root() / "toolchain"

    @property
    def toolchain_tree(self) -> Path:
        return self.toolchain_dir / "linux" / "iphone"

    @property
    def compiler_path(self) -> Path:
        return self.toolchain_tree / "bin" / "clang"

    @property
    def sdks_dir(self) -> Path:
        return self.require_root() / "sdks"


class Step(Protocol):
    """A single idempotent step.

    run() returns True when it changed something and False when the resource
    was already in place.
    """

    step_id: str

    def run(self, ctx: InstallCtx) -> bool:
        ...


@dataclass(frozen=True)
class PipelineResult:
    ran_steps: List[str]
    skipped_steps: List[str]


def dir_has_entries(path: Path) -> bool:
    return path.is_dir() and any(path.iterdir())


def ensure_resource(
    name: str,
    *,
    is_present: Callable[[], bool],
    acquire: Callable[[], None],
    on_present: Optional[Callable[[], None]] = None,
    verify_error: Optional[Callable[[str], InstallerError]] = None,
) -> bool:
    """Check, act, then (optionally) re-check a resource.

    If verify_error is given the post-acquire check is the success criterion:
    a clean acquire() that leaves the resource absent still fails.
    """

    if is_present():
        logger.info("%s already installed", name)
        if on_present is not None:
            on_present()
        return False

    logger.info("Installing %s", name)
    acquire()

    if verify_error is not None and not is_present():
        raise verify_error(f"{name} installation could not be verified")

    logger.info("%s installed", name)
    return True


def run_pipeline(*, ctx: InstallCtx, steps: Sequence[Step]) -> PipelineResult:
    """Run steps in order; the first exception ends the run."""

    ran: List[str] = []
    skipped: List[str] = []

    for step in steps:
        logger.debug("Running step %s", step.step_id)
        if step.run(ctx):
            ran.append(step.step_id)
        else:
            skipped.append(step.step_id)

    return PipelineResult(ran_steps=ran, skipped_steps=skipped)
