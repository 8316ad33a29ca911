from frognet_installer.lib.mapinterfaces import patch_map_file, patch_text, plan_roles

TEMPLATE = """#!/bin/bash
export eth0Name="ens33"
export wlan0Name="wlp2s0"
export wlan1Name="wlx00c0ca"
UPLINK=ens33
"""


def test_plan_roles_skips_upstream():
    assert plan_roles("wlan0", ["wlan0", "wlan1"]) == {"wlan0Name": "wlan1", "wlan1Name": ""}
    assert plan_roles("eth0", ["wlan0", "wlan1"]) == {"wlan0Name": "wlan0", "wlan1Name": "wlan1"}
    assert plan_roles("eth0", []) == {"wlan0Name": "", "wlan1Name": ""}


def test_patch_text_sets_exports_and_placeholder():
    out = patch_text(TEMPLATE, {"wlan0Name": "wlan0", "wlan1Name": ""}, upstream="eth0")
    assert 'export wlan0Name="wlan0"' in out
    assert 'export wlan1Name=""' in out
    assert 'export eth0Name="eth0"' in out
    assert "UPLINK=eth0" in out
    assert "ens33" not in out


def test_patch_text_appends_missing_export():
    out = patch_text("#!/bin/bash\n", {"wlan0Name": "wlan0"})
    assert out.splitlines()[-1] == 'export wlan0Name="wlan0"'


def test_patch_map_file_missing_is_not_fatal(tmp_path, caplog):
    assert patch_map_file(str(tmp_path / "mapInterfaces"), {"wlan0Name": "wlan0"}) is False
    assert "not found" in caplog.text


def test_patch_map_file_dry_run_leaves_file(tmp_path):
    p = tmp_path / "mapInterfaces"
    p.write_text(TEMPLATE)
    assert patch_map_file(str(p), {"wlan0Name": "wlan0"}, upstream="eth0", dry_run=True) is True
    assert p.read_text() == TEMPLATE
