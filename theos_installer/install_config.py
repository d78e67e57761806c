from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

DEFAULT_DEBIAN_PACKAGES = [
    "build-essential",
    "fakeroot",
    "rsync",
    "curl",
    "perl",
    "zip",
    "git",
    "libxml2",
]


@dataclass(frozen=True)
class InstallConfig:
    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def env_var(self) -> str:
        return str(self.raw.get("env_var") or "THEOS")

    @property
    def default_root(self) -> str:
        return str(self.raw.get("default_root") or "~/theos")

    @property
    def repo_url(self) -> str:
        return str(((self.raw.get("repository") or {}).get("url")) or "https://github.com/theos/theos.git")

    @property
    def update_repository(self) -> bool:
        update = (self.raw.get("repository") or {}).get("update")
        return True if update is None else bool(update)

    @property
    def toolchain_url(self) -> str:
        return str(
            ((self.raw.get("toolchain") or {}).get("url"))
            or "https://github.com/L1ghtmann/llvm-project/releases/latest/download/iOSToolchain-{machine}.tar.xz"
        )

    @property
    def toolchain_extra_package(self) -> Optional[str]:
        tc = self.raw.get("toolchain") or {}
        if "extra_package" in tc:
            return tc["extra_package"] or None
        return "libncurses6"

    @property
    def sdks_url(self) -> str:
        return str(((self.raw.get("sdks") or {}).get("url")) or "https://api.github.com/repos/theos/sdks/tarball/master")

    @property
    def debian_packages(self) -> List[str]:
        pkgs = (self.raw.get("dependencies") or {}).get("debian")
        if pkgs is None:
            return list(DEFAULT_DEBIAN_PACKAGES)
        return [str(p) for p in pkgs]

    def with_overrides(self, **overrides: Any) -> "InstallConfig":
        """Return a copy with CLI overrides merged in (None values ignored)."""
        raw = dict(self.raw)
        if overrides.get("update_repository") is not None:
            raw["repository"] = dict(raw.get("repository") or {}, update=overrides["update_repository"])
        return InstallConfig(raw=raw)


def load_install_config(path: Optional[str]) -> InstallConfig:
    if path is None:
        return InstallConfig()

    p = Path(path).expanduser()
    if not p.exists():
        raise FileNotFoundError(path)

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ValueError("installer config must be YAML")

    raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"{path} must contain a mapping/object")

    return InstallConfig(raw=raw)
