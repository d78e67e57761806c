from __future__ import annotations

import logging
import platform
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)

OS_RELEASE = Path("/etc/os-release")

# apt-based families we know how to install dependencies on.
_KNOWN_DISTRO_IDS = {"debian", "ubuntu"}


class Distro(Enum):
    KNOWN = "debian-like"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class PlatformInfo:
    os_family: str
    distro: Distro = Distro.UNKNOWN
    distro_id: Optional[str] = None
    machine: str = "x86_64"

    @property
    def is_linux(self) -> bool:
        return self.os_family == "Linux"


def parse_os_release(text: str) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        out[key.strip()] = value.strip().strip("\"'")
    return out


def _classify(release: Dict[str, str]) -> Distro:
    ids = {release.get("ID", "").lower()}
    ids.update(t.lower() for t in release.get("ID_LIKE", "").split())
    return Distro.KNOWN if ids & _KNOWN_DISTRO_IDS else Distro.UNKNOWN


def detect_platform(os_release: Path = OS_RELEASE) -> PlatformInfo:
    """Identify the host OS family and distribution flavor (best-effort)."""

    os_family = platform.system()
    machine = platform.machine() or "x86_64"

    release: Dict[str, str] = {}
    if os_family == "Linux":
        try:
            release = parse_os_release(os_release.read_text(encoding="utf-8"))
        except OSError:
            logger.debug("Unable to read %s", os_release)

    info = PlatformInfo(
        os_family=os_family,
        distro=_classify(release) if release else Distro.UNKNOWN,
        distro_id=release.get("ID") or None,
        machine=machine,
    )
    logger.info("Platform: os=%s distro=%s (%s) machine=%s", info.os_family, info.distro.value, info.distro_id, info.machine)
    return info
