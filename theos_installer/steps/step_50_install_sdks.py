from __future__ import annotations

import logging
import shutil
import tarfile
import tempfile
import urllib.error
from pathlib import Path

from ..errors import SDKInstallError
from ..lib.fetch import download, extract_tar
from ..pipeline import InstallCtx, ensure_resource

logger = logging.getLogger(__name__)


def has_sdks(sdks_dir: Path) -> bool:
    return sdks_dir.is_dir() and any(sdks_dir.glob("*.sdk"))


class InstallSDKsStep:
    step_id = "50_install_sdks"

    def _fetch_sdks(self, ctx: InstallCtx) -> None:
        sdks_dir = ctx.sdks_dir
        sdks_dir.mkdir(parents=True, exist_ok=True)

        tmp = Path(tempfile.mkdtemp(prefix="theos-sdks-"))
        archive = ctx.require_root() / "sdks.tar.gz"
        try:
            download(ctx.cfg.sdks_url, archive)
            extract_tar(archive, tmp, strip_components=1)
            for sdk in sorted(tmp.glob("*.sdk")):
                dest = sdks_dir / sdk.name
                if dest.exists():
                    logger.info("Keeping existing %s", dest)
                    continue
                shutil.move(str(sdk), str(dest))
                logger.debug("Installed %s", dest)
        except (urllib.error.URLError, tarfile.TarError, OSError) as e:
            raise SDKInstallError(f"SDK download/extract failed: {e}") from e
        finally:
            shutil.rmtree(tmp, ignore_errors=True)
            archive.unlink(missing_ok=True)

    def run(self, ctx: InstallCtx) -> bool:
        return ensure_resource(
            f"SDKs ({ctx.sdks_dir})",
            is_present=lambda: has_sdks(ctx.sdks_dir),
            acquire=lambda: self._fetch_sdks(ctx),
            verify_error=SDKInstallError,
        )
