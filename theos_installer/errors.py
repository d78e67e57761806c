from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """Process exit codes. Each one names exactly one failure class.

    9-11 are reserved for macOS post-install fixups and never emitted on Linux.
    """

    OK = 0
    PRIVILEGED = 1
    UNSUPPORTED_PLATFORM = 2
    DEPENDENCY_INSTALL_FAILED = 3
    UNSUPPORTED_SHELL = 4
    ENVIRONMENT_CONFIG_FAILED = 5
    CLONE_FAILED = 6
    TOOLCHAIN_INSTALL_FAILED = 7
    SDK_INSTALL_FAILED = 8


class InstallerError(RuntimeError):
    exit_code: ExitCode = ExitCode.OK


class PrivilegeError(InstallerError):
    exit_code = ExitCode.PRIVILEGED


class UnsupportedPlatformError(InstallerError):
    exit_code = ExitCode.UNSUPPORTED_PLATFORM


class DependencyInstallError(InstallerError):
    exit_code = ExitCode.DEPENDENCY_INSTALL_FAILED


class UnsupportedShellError(InstallerError):
    exit_code = ExitCode.UNSUPPORTED_SHELL


class EnvironmentConfigError(InstallerError):
    exit_code = ExitCode.ENVIRONMENT_CONFIG_FAILED


class CloneError(InstallerError):
    exit_code = ExitCode.CLONE_FAILED


class ToolchainInstallError(InstallerError):
    exit_code = ExitCode.TOOLCHAIN_INSTALL_FAILED


class SDKInstallError(InstallerError):
    exit_code = ExitCode.SDK_INSTALL_FAILED
