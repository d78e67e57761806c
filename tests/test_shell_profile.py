from pathlib import Path

import pytest

from theos_installer.lib.shell_profile import Dialect, ShellProfile, resolve_shell_profile


def test_bash_prefers_existing_bashrc(home: Path):
    (home / ".bashrc").write_text("")
    (home / ".profile").write_text("")
    sp = resolve_shell_profile("bash", home)
    assert sp.dialect is Dialect.POSIX
    assert sp.path == home / ".bashrc"


def test_shell_path_uses_basename(home: Path):
    (home / ".zshrc").write_text("")
    sp = resolve_shell_profile("/usr/bin/zsh", home)
    assert sp.shell == "zsh"
    assert sp.path == home / ".zshrc"


def test_zsh_priority_order(home: Path):
    (home / ".zshrc").write_text("")
    (home / ".zshenv").write_text("")
    assert resolve_shell_profile("zsh", home).path == home / ".zshenv"


def test_falls_back_to_bash_profile(home: Path):
    (home / ".bash_profile").write_text("")
    assert resolve_shell_profile("bash", home).path == home / ".bash_profile"


@pytest.mark.parametrize("shell", ["bash", "zsh", "sh"])
def test_posix_default_when_nothing_exists(home: Path, shell):
    sp = resolve_shell_profile(shell, home)
    assert sp.path == home / ".profile"
    assert not sp.path.exists()


def test_fish(home: Path):
    sp = resolve_shell_profile("fish", home)
    assert sp.dialect is Dialect.FISH
    assert sp.path == home / ".config" / "fish" / "config.fish"


@pytest.mark.parametrize("shell", ["tcsh", "csh", "nu", "", "Bash"])
def test_unknown_shell_has_no_path(home: Path, shell):
    sp = resolve_shell_profile(shell, home)
    assert sp.dialect is Dialect.UNKNOWN
    assert sp.path is None


def test_export_line_syntax(home: Path):
    posix = ShellProfile(Dialect.POSIX, "bash", home / ".bashrc")
    fish = ShellProfile(Dialect.FISH, "fish", home / "config.fish")
    assert posix.export_line("THEOS", "/h/theos") == 'export THEOS="/h/theos"'
    assert fish.export_line("THEOS", "/h/theos") == 'set -gx THEOS "/h/theos"'
    with pytest.raises(ValueError):
        ShellProfile(Dialect.UNKNOWN, "tcsh").export_line("THEOS", "x")
