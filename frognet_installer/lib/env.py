from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Paths:
    install_dir: str = "/etc/frognet"
    env_file: str = "/etc/frognet/frognet.env"
    payload: str = "/etc/frognet/installable_tar.tar"
    extract_root: str = "/"
    map_file: str = "/usr/local/bin/mapInterfaces"
    sysctl_conf: str = "/etc/sysctl.conf"
    start_dir: str = "/usr/local/bin"
    os_release: str = "/etc/os-release"
    resolv_conf: str = "/etc/resolv.conf"
    hosts_file: str = "/etc/hosts"
    sentinels_dir: str = "/etc/sentinels"
    sys_class_net: str = "/sys/class/net"
    state_default: str = "/var/lib/frognet-installer/state.json"
    log_default: str = "/var/log/frognet-install.log"
    reboot_log_default: str = "/var/log/frognet-reboot.log"
    start_log: str = "/var/log/frognet-start.log"


PATHS = Paths()
