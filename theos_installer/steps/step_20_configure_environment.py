from __future__ import annotations

import logging
from pathlib import Path

from ..errors import EnvironmentConfigError, UnsupportedShellError
from ..lib.shell_profile import Dialect
from ..pipeline import InstallCtx

logger = logging.getLogger(__name__)


class ConfigureEnvironmentStep:
    step_id = "20_configure_environment"

    def run(self, ctx: InstallCtx) -> bool:
        name = ctx.cfg.env_var

        existing = ctx.environ.get(name)
        if existing:
            # Trusted as-is; a user-chosen location is never second-guessed.
            ctx.root = Path(existing).expanduser()
            logger.info("%s already set: %s", name, ctx.root)
            return False

        profile = ctx.shell_profile
        if profile.dialect is Dialect.UNKNOWN or profile.path is None:
            raise UnsupportedShellError(
                f"Unrecognized shell {profile.shell!r}; set {name} in your shell startup file and re-run"
            )

        root = Path(ctx.cfg.default_root).expanduser()
        line = profile.export_line(name, str(root))
        try:
            profile.path.parent.mkdir(parents=True, exist_ok=True)
            with profile.path.open("a", encoding="utf-8") as fh:
                fh.write(f"\n{line}\n")
        except OSError as e:
            raise EnvironmentConfigError(f"Unable to write {name} to {profile.path}: {e}") from e

        ctx.environ[name] = str(root)
        ctx.root = root

        logger.info("Added %s=%s to %s", name, root, profile.path)
        return True
