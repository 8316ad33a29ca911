from .reboot_10_load_env import LoadEnvStep
from .reboot_20_free_dns_port import FreeDnsPortStep
from .reboot_30_launch_start_script import LaunchStartScriptStep
from .reboot_40_remove_cron import RemoveCronStep
from .step_10_preflight import PreflightStep
from .step_20_configure import ConfigureStep
from .step_30_install_packages import InstallPackagesStep
from .step_35_stage_bundle import StageBundleStep
from .step_40_extract_payload import ExtractPayloadStep
from .step_50_map_interfaces import MapInterfacesStep
from .step_60_ip_forwarding import IpForwardingStep
from .step_65_network_sanity import NetworkSanityStep
from .step_70_register import RegisterStep
from .step_80_schedule_reboot import ScheduleRebootStep
from .step_90_reboot import RebootStep

__all__ = [
    "PreflightStep",
    "ConfigureStep",
    "InstallPackagesStep",
    "StageBundleStep",
    "ExtractPayloadStep",
    "MapInterfacesStep",
    "IpForwardingStep",
    "NetworkSanityStep",
    "RegisterStep",
    "ScheduleRebootStep",
    "RebootStep",
    "LoadEnvStep",
    "FreeDnsPortStep",
    "LaunchStartScriptStep",
    "RemoveCronStep",
]
