from .step_10_install_dependencies import InstallDependenciesStep
from .step_20_cleanup import CleanupStep
from .step_30_install_sunshine import InstallSunshineStep
from .step_40_configure_firewall import ConfigureFirewallStep
from .step_50_install_cloudflared import InstallCloudflaredStep
from .step_60_configure_xorg import ConfigureXorgStep
from .step_70_start_xserver import StartXServerStep
from .step_80_start_desktop import StartDesktopStep
from .step_90_start_sunshine import StartSunshineStep
from .step_95_start_tunnel import StartTunnelStep

__all__ = [
    "InstallDependenciesStep",
    "CleanupStep",
    "InstallSunshineStep",
    "ConfigureFirewallStep",
    "InstallCloudflaredStep",
    "ConfigureXorgStep",
    "StartXServerStep",
    "StartDesktopStep",
    "StartSunshineStep",
    "StartTunnelStep",
]
