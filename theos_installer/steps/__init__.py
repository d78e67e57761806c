from .step_10_install_dependencies import InstallDependenciesStep
from .step_20_configure_environment import ConfigureEnvironmentStep
from .step_30_sync_repository import SyncRepositoryStep
from .step_40_install_toolchain import InstallToolchainStep
from .step_50_install_sdks import InstallSDKsStep

__all__ = [
    "InstallDependenciesStep",
    "ConfigureEnvironmentStep",
    "SyncRepositoryStep",
    "InstallToolchainStep",
    "InstallSDKsStep",
]
