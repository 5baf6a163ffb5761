from .step_10_check_platform import CheckPlatformStep
from .step_20_install_homebrew import InstallHomebrewStep
from .step_30_switch_shell import SwitchShellStep
from .step_40_install_shell_framework import InstallShellFrameworkStep
from .step_50_install_tools import InstallToolsStep
from .step_60_install_apps import InstallAppsStep
from .step_70_fetch_plugins import FetchPluginsStep
from .step_80_build_editor import BuildEditorStep
from .step_90_clone_repos import CloneReposStep
from .step_95_bootstrap_build_tool import BootstrapBuildToolStep
from .step_99_install_shell_config import InstallShellConfigStep

__all__ = [
    "CheckPlatformStep",
    "InstallHomebrewStep",
    "SwitchShellStep",
    "InstallShellFrameworkStep",
    "InstallToolsStep",
    "InstallAppsStep",
    "FetchPluginsStep",
    "BuildEditorStep",
    "CloneReposStep",
    "BootstrapBuildToolStep",
    "InstallShellConfigStep",
]
