import subprocess
import types

import pytest

from frognet_installer.lib import command
from frognet_installer.logging_utils import reset_logging

OS_RELEASE_DEBIAN = """PRETTY_NAME="Debian GNU/Linux 12 (bookworm)"
NAME="Debian GNU/Linux"
VERSION_ID="12"
ID=debian
"""


class FakeRunner:
    """Stands in for subprocess.run inside run_cmd; answers by longest argv prefix."""

    def __init__(self):
        self.calls = []
        self.responses = {}

    def respond(self, *prefix, returncode=0, stdout="", stderr=""):
        self.responses[tuple(prefix)] = (returncode, stdout, stderr)

    def __call__(self, argv, input=None, text=True, stdout=None, stderr=None, cwd=None, env=None):
        argv = list(argv)
        self.calls.append(types.SimpleNamespace(argv=argv, input=input, env=env, cwd=cwd))
        best = ()
        for prefix in self.responses:
            if tuple(argv[: len(prefix)]) == prefix and len(prefix) > len(best):
                best = prefix
        rc, out, err = self.responses.get(best, (0, "", ""))
        return subprocess.CompletedProcess(argv, rc, out, err)

    @property
    def argvs(self):
        return [c.argv for c in self.calls]

    def ran(self, *prefix):
        return any(tuple(a[: len(prefix)]) == prefix for a in self.argvs)


@pytest.fixture
def runner(monkeypatch):
    fake = FakeRunner()
    monkeypatch.setattr(
        command,
        "subprocess",
        types.SimpleNamespace(run=fake, PIPE=subprocess.PIPE),
    )
    return fake


@pytest.fixture(autouse=True)
def _clean_logging():
    yield
    reset_logging()


@pytest.fixture
def host(tmp_path):
    """A fake host filesystem and the installer config pointing into it."""

    root = tmp_path / "host"
    etc = root / "etc"
    etc.mkdir(parents=True)
    (etc / "os-release").write_text(OS_RELEASE_DEBIAN)
    (etc / "resolv.conf").write_text("nameserver 192.168.1.1\n")
    (etc / "hosts").write_text("127.0.0.1\tlocalhost\n")
    (etc / "sysctl.conf").write_text("#net.ipv4.ip_forward=1\n")

    net = root / "sys" / "class" / "net"
    for name in ("eth0", "lo", "wlan0", "wlan1"):
        (net / name).mkdir(parents=True)
    (net / "wlan0" / "wireless").mkdir()
    (net / "wlan1" / "wireless").mkdir()

    bin_dir = root / "usr" / "local" / "bin"
    bin_dir.mkdir(parents=True)

    install_dir = etc / "frognet"
    config = {
        "interactive": False,
        "packages": ["apache2", "dnsmasq"],
        "paths": {
            "install_dir": str(install_dir),
            "payload": str(install_dir / "installable_tar.tar"),
            "extract_root": str(root),
            "map_file": str(bin_dir / "mapInterfaces"),
            "sysctl_conf": str(etc / "sysctl.conf"),
            "start_dir": str(bin_dir),
            "start_log": str(root / "var" / "log" / "frognet-start.log"),
            "os_release": str(etc / "os-release"),
            "resolv_conf": str(etc / "resolv.conf"),
            "hosts_file": str(etc / "hosts"),
            "sentinels_dir": str(etc / "sentinels"),
            "sys_class_net": str(net),
        },
        "answers": {
            "domain": "frognet.local",
            "node_ip": "10.101.0.1",
            "interface": "eth0",
            "admin_username": "admin",
            "admin_password": "hunter2hunter2",
        },
        "reboot": {"enabled": True, "delay_seconds": 0},
    }
    return types.SimpleNamespace(root=root, etc=etc, net=net, bin_dir=bin_dir, install_dir=install_dir, config=config)
