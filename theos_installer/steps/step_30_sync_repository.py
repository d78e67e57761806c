from __future__ import annotations

import logging

from ..errors import CloneError
from ..lib.command import CommandError, run_cmd
from ..pipeline import InstallCtx, dir_has_entries, ensure_resource

logger = logging.getLogger(__name__)


class SyncRepositoryStep:
    step_id = "30_sync_repository"

    def run(self, ctx: InstallCtx) -> bool:
        root = ctx.require_root()

        def clone() -> None:
            try:
                run_cmd(["git", "clone", "--recursive", ctx.cfg.repo_url, str(root)], capture=False)
            except CommandError as e:
                raise CloneError(f"Failed to clone {ctx.cfg.repo_url} into {root}: {e}") from e

        def update() -> None:
            if not ctx.cfg.update_repository:
                logger.info("Repository update disabled")
                return
            r = run_cmd(
                [str(root / "bin" / "update-theos")],
                check=False,
                capture=False,
                env={ctx.cfg.env_var: str(root)},
            )
            if r.returncode != 0:
                logger.warning("Repository self-update failed (%s); continuing with the existing checkout", r.returncode)

        # The clone is trusted on git's exit status alone.
        return ensure_resource(
            f"repository ({root})",
            is_present=lambda: dir_has_entries(root),
            acquire=clone,
            on_present=update,
        )
