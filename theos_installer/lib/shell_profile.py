from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Optional, Tuple

logger = logging.getLogger(__name__)


class Dialect(Enum):
    POSIX = "posix"
    FISH = "fish"
    UNKNOWN = "unknown"


# Candidate startup files per shell, highest priority first.
_POSIX_CANDIDATES: Dict[str, Tuple[str, ...]] = {
    "bash": (".bashrc", ".bash_profile", ".profile"),
    "zsh": (".zshenv", ".zshrc", ".zprofile", ".profile"),
    "sh": (".profile",),
}
_FISH_CANDIDATES: Tuple[str, ...] = (".config/fish/config.fish",)

_DEFAULT_PROFILE = {
    Dialect.POSIX: ".profile",
    Dialect.FISH: ".config/fish/config.fish",
}


@dataclass(frozen=True)
class ShellProfile:
    dialect: Dialect
    shell: str
    path: Optional[Path] = None

    def export_line(self, name: str, value: str) -> str:
        if self.dialect is Dialect.POSIX:
            return f'export {name}="{value}"'
        if self.dialect is Dialect.FISH:
            return f'set -gx {name} "{value}"'
        raise ValueError(f"No export syntax for shell {self.shell!r}")


def shell_dialect(shell: str) -> Dialect:
    if shell in _POSIX_CANDIDATES:
        return Dialect.POSIX
    if shell == "fish":
        return Dialect.FISH
    return Dialect.UNKNOWN


def resolve_shell_profile(shell: str, home: Path) -> ShellProfile:
    """Pick the startup file of the invoking shell.

    shell may be a bare name or a path such as /usr/bin/zsh. The first existing
    candidate wins; otherwise the dialect default is returned even though it may
    not exist yet (it is created on first write).
    """

    name = Path(shell).name if shell else ""
    dialect = shell_dialect(name)
    if dialect is Dialect.UNKNOWN:
        logger.debug("Unrecognized shell %r", shell)
        return ShellProfile(dialect=dialect, shell=name)

    candidates = _POSIX_CANDIDATES[name] if dialect is Dialect.POSIX else _FISH_CANDIDATES
    for rel in candidates:
        p = home / rel
        if p.exists():
            return ShellProfile(dialect=dialect, shell=name, path=p)

    return ShellProfile(dialect=dialect, shell=name, path=home / _DEFAULT_PROFILE[dialect])
