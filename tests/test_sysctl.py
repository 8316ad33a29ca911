from frognet_installer.lib.sysctl import enable_ip_forwarding, set_conf_value


def test_set_conf_value_uncomments():
    text = "# comment\n#net.ipv4.ip_forward=1\nvm.swappiness=10\n"
    assert set_conf_value(text, "net.ipv4.ip_forward", "1") == "# comment\nnet.ipv4.ip_forward=1\nvm.swappiness=10\n"


def test_set_conf_value_replaces_and_dedupes():
    text = "net.ipv4.ip_forward = 0\nnet.ipv4.ip_forward=0\n"
    assert set_conf_value(text, "net.ipv4.ip_forward", "1") == "net.ipv4.ip_forward=1\n"


def test_set_conf_value_appends():
    assert set_conf_value("", "net.ipv4.ip_forward", "1") == "net.ipv4.ip_forward=1\n"


def test_enable_ip_forwarding(tmp_path, runner):
    conf = tmp_path / "sysctl.conf"
    conf.write_text("#net.ipv4.ip_forward=1\n")
    enable_ip_forwarding(str(conf))

    assert conf.read_text() == "net.ipv4.ip_forward=1\n"
    assert ["sysctl", "-w", "net.ipv4.ip_forward=1"] in runner.argvs
    assert ["sysctl", "-p", str(conf)] in runner.argvs
