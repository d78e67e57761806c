from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path
from typing import MutableMapping, Optional

from .errors import ExitCode, InstallerError, PrivilegeError, UnsupportedPlatformError
from .install_config import InstallConfig, load_install_config
from .lib.platform_info import PlatformInfo, detect_platform
from .lib.prompt import DecisionSource, FixedAnswer, InteractivePrompt
from .lib.shell_profile import resolve_shell_profile
from .logging_utils import DEFAULT_LOG_PATH, active_log_path, attach_log_file, configure_logging
from .pipeline import InstallCtx, PipelineResult, run_pipeline
from .steps import (
    ConfigureEnvironmentStep,
    InstallDependenciesStep,
    InstallSDKsStep,
    InstallToolchainStep,
    SyncRepositoryStep,
)

logger = logging.getLogger(__name__)

CI_ENV_VAR = "CI"


def build_steps():
    return [
        InstallDependenciesStep(),
        ConfigureEnvironmentStep(),
        SyncRepositoryStep(),
        InstallToolchainStep(),
        InstallSDKsStep(),
    ]


def _running_as_root() -> bool:
    return hasattr(os, "geteuid") and os.geteuid() == 0


def decision_source(environ: MutableMapping[str, str]) -> DecisionSource:
    if environ.get(CI_ENV_VAR):
        return FixedAnswer(False)
    return InteractivePrompt()


def provision(ctx: InstallCtx, *, log_path: Optional[str] = None) -> PipelineResult:
    """Run every step for the detected platform. Only Linux is supported.

    Nothing touches the disk, the log file included, before the platform gate.
    """

    if not ctx.platform.is_linux:
        raise UnsupportedPlatformError(f"Unsupported platform: {ctx.platform.os_family}")

    if log_path is not None:
        attach_log_file(log_path)

    result = run_pipeline(ctx=ctx, steps=build_steps())
    logger.info(
        "Done. Installed: %s; already present: %s",
        ", ".join(result.ran_steps) or "nothing",
        ", ".join(result.skipped_steps) or "nothing",
    )
    return result


def run(
    cfg: InstallConfig,
    *,
    shell: Optional[str] = None,
    environ: Optional[MutableMapping[str, str]] = None,
    home: Optional[Path] = None,
    platform_info: Optional[PlatformInfo] = None,
    decisions: Optional[DecisionSource] = None,
    log_path: Optional[str] = None,
) -> PipelineResult:
    if _running_as_root():
        raise PrivilegeError("Do not run the installer as root; it uses sudo where needed")

    env = os.environ if environ is None else environ
    info = platform_info or detect_platform()
    ctx = InstallCtx(
        cfg=cfg,
        platform=info,
        shell_profile=resolve_shell_profile(shell or env.get("SHELL", ""), home or Path.home()),
        decisions=decisions or decision_source(env),
        environ=env,
    )
    return provision(ctx, log_path=log_path)


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="theos-installer")
    p.add_argument("--config", default=None, help="Optional installer config (yaml)")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to installer log")
    p.add_argument("--shell", default=None, help="Shell to configure (default: $SHELL)")
    p.add_argument("--no-update", action="store_true", help="Don't self-update an existing checkout")
    p.add_argument("-v", "--verbose", action="store_true")

    args = p.parse_args(argv)

    configure_logging(None, verbose=bool(args.verbose))

    try:
        cfg = load_install_config(args.config)
        if args.no_update:
            cfg = cfg.with_overrides(update_repository=False)
        run(cfg, shell=args.shell, log_path=args.log)
    except InstallerError as e:
        logger.error("%s", e)
        logger.debug("Failure details", exc_info=True)
        if active_log_path():
            logger.error("See %s for the full log", active_log_path())
        return int(e.exit_code)

    return int(ExitCode.OK)


if __name__ == "__main__":
    raise SystemExit(main())
