from frognet_installer.lib import pkg

INSTALLED = "Package: apache2\nStatus: install ok installed\n"


def test_missing_packages(runner):
    runner.respond("dpkg", "-s", returncode=1, stderr="not installed")
    runner.respond("dpkg", "-s", "apache2", stdout=INSTALLED)
    assert pkg.missing_packages(["apache2", "dnsmasq", "jq"]) == ["dnsmasq", "jq"]


def test_deinstalled_package_counts_as_missing(runner):
    runner.respond("dpkg", "-s", "php", stdout="Package: php\nStatus: deinstall ok config-files\n")
    assert pkg.missing_packages(["php"]) == ["php"]


def test_apt_install_is_noninteractive(runner):
    pkg.apt_update()
    pkg.apt_install(["dnsmasq", "jq"])

    assert runner.argvs == [["apt-get", "update", "-qq"], ["apt-get", "install", "-y", "dnsmasq", "jq"]]
    assert all(c.env["DEBIAN_FRONTEND"] == "noninteractive" for c in runner.calls)


def test_apt_install_nothing(runner):
    pkg.apt_install([])
    assert runner.calls == []
