from frognet_installer.lib import cron

EXISTING = "# m h dom mon dow command\n0 3 * * * /usr/bin/backup\n"


def test_read_crontab_empty_when_none(runner):
    runner.respond("crontab", "-l", returncode=1, stderr="no crontab for root")
    assert cron.read_crontab() == ""


def test_add_reboot_entry_appends(runner):
    runner.respond("crontab", "-l", stdout=EXISTING)
    assert cron.add_reboot_entry("/usr/local/bin/frognet-installer --on-reboot") is True

    written = runner.calls[-1]
    assert written.argv == ["crontab", "-"]
    assert written.input == EXISTING + "@reboot /usr/local/bin/frognet-installer --on-reboot\n"


def test_add_reboot_entry_is_idempotent(runner):
    runner.respond("crontab", "-l", stdout=EXISTING + "@reboot /usr/local/bin/frognet-installer --on-reboot\n")
    assert cron.add_reboot_entry("/usr/local/bin/frognet-installer --on-reboot") is False
    assert not runner.ran("crontab", "-")


def test_remove_entries_needs_every_marker(runner):
    runner.respond(
        "crontab",
        "-l",
        stdout=EXISTING
        + "@reboot /usr/local/bin/frognet-installer --on-reboot --state /s.json\n"
        + "@reboot /opt/other/tool --on-reboot\n",
    )
    assert cron.remove_entries("frognet", "--on-reboot") == 1
    assert runner.calls[-1].input == EXISTING + "@reboot /opt/other/tool --on-reboot\n"


def test_remove_entries_nothing_to_do(runner):
    runner.respond("crontab", "-l", stdout=EXISTING)
    assert cron.remove_entries("frognet", "--on-reboot") == 0
    assert not runner.ran("crontab", "-")


def test_dry_run_never_touches_crontab(runner):
    assert cron.add_reboot_entry("x --on-reboot", dry_run=True) is True
    assert runner.calls == []
