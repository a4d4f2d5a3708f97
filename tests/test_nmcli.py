"""Tests for the nmcli backend: output parsing and command construction."""

import logging
import subprocess
from unittest.mock import patch

import pytest

from wifiselect.core.errors import BackendError, MissingDependencyError
from wifiselect.network.backend import ScanRecord, is_open_security
from wifiselect.network.nmcli import (
    NmcliBackend,
    parse_name_output,
    parse_scan_output,
    split_terse_line,
)

NMCLI = "/usr/bin/nmcli"


def completed(stdout="", stderr="", returncode=0):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


@pytest.fixture
def nmcli():
    with patch("wifiselect.network.nmcli.shutil.which", return_value=NMCLI):
        yield NmcliBackend()


@pytest.fixture
def run():
    with patch("wifiselect.network.nmcli.subprocess.run") as mock_run:
        mock_run.return_value = completed()
        yield mock_run


def called_args(mock_run):
    return mock_run.call_args.args[0]


class TestSplitTerseLine:
    def test_plain_fields(self):
        assert split_terse_line("Home:72:WPA2") == ["Home", "72", "WPA2"]

    def test_escaped_colon_stays_in_field(self):
        assert split_terse_line(r"My\:Net:55:WPA1 WPA2") == ["My:Net", "55", "WPA1 WPA2"]

    def test_escaped_backslash(self):
        assert split_terse_line(r"back\\slash:10:") == ["back\\slash", "10", ""]

    def test_empty_fields(self):
        assert split_terse_line(":40:WPA2") == ["", "40", "WPA2"]


class TestParseScanOutput:
    def test_parses_rows_in_order(self):
        output = "Home:72:WPA2\nCafe:60:\n:45:WPA2\n"

        assert parse_scan_output(output) == [
            ScanRecord("Home", 72, "WPA2"),
            ScanRecord("Cafe", 60, ""),
            ScanRecord("", 45, "WPA2"),
        ]

    def test_keeps_duplicates(self):
        records = parse_scan_output("A:80:WPA2\nA:60:WPA2")
        assert [r.signal for r in records] == [80, 60]

    def test_bad_signal_becomes_zero(self):
        assert parse_scan_output("Home:??:WPA2")[0].signal == 0

    def test_skips_blank_and_short_lines(self):
        assert parse_scan_output("\n  \ngarbage\n") == []

    def test_unescaped_colon_in_ssid(self):
        record = parse_scan_output("a:b:30:--")[0]
        assert record.ssid == "a:b"
        assert record.is_open


@pytest.mark.parametrize(
    "security, expected", [("", True), ("--", True), ("  ", True), ("WPA2", False), ("WPA1 WPA2", False)]
)
def test_open_security(security, expected):
    assert is_open_security(security) is expected
    assert ScanRecord("x", 10, security).is_open is expected


def test_parse_name_output():
    assert parse_name_output("Home\nWired connection 1\n\nOff\\:ice\n") == [
        "Home",
        "Wired connection 1",
        "Off:ice",
    ]


class TestNmcliBackend:
    def test_missing_nmcli(self):
        with patch("wifiselect.network.nmcli.shutil.which", return_value=None):
            with pytest.raises(MissingDependencyError) as exc_info:
                NmcliBackend()

        assert exc_info.value.tool == "nmcli"

    def test_scan_command(self, nmcli, run):
        run.return_value = completed("Home:72:WPA2\n")

        assert nmcli.scan() == [ScanRecord("Home", 72, "WPA2")]
        assert called_args(run) == [
            NMCLI, "-t", "-f", "SSID,SIGNAL,SECURITY", "device", "wifi", "list"
        ]
        assert "shell" not in run.call_args.kwargs

    def test_rescan_runs_first_and_may_fail(self, run):
        with patch("wifiselect.network.nmcli.shutil.which", return_value=NMCLI):
            backend = NmcliBackend(rescan=True)
        run.side_effect = [completed(returncode=1, stderr="busy"), completed("Home:72:WPA2")]

        assert len(backend.scan()) == 1
        first = run.call_args_list[0].args[0]
        assert first == [NMCLI, "device", "wifi", "rescan"]

    def test_list_profiles(self, nmcli, run):
        run.return_value = completed("Home\nOffice\n")

        assert nmcli.list_profiles() == ["Home", "Office"]
        assert called_args(run) == [NMCLI, "-t", "-f", "NAME", "connection", "show"]

    def test_list_active_profiles(self, nmcli, run):
        nmcli.list_profiles(active=True)
        assert called_args(run)[-1] == "--active"

    def test_connect_profile(self, nmcli, run):
        nmcli.connect_profile("Office")
        assert called_args(run) == [NMCLI, "connection", "up", "Office"]

    def test_connect_new_open(self, nmcli, run):
        nmcli.connect_new("Cafe")
        assert called_args(run) == [NMCLI, "device", "wifi", "connect", "Cafe"]

    def test_connect_new_with_password(self, nmcli, run):
        nmcli.connect_new("Home", "hunter22")
        assert called_args(run) == [
            NMCLI, "device", "wifi", "connect", "Home", "password", "hunter22"
        ]

    def test_connect_new_with_empty_password(self, nmcli, run):
        nmcli.connect_new("Home", "")
        assert called_args(run) == [NMCLI, "device", "wifi", "connect", "Home", "password", ""]

    def test_failure_carries_reason(self, nmcli, run):
        run.return_value = completed(
            returncode=4,
            stderr="Error: Connection activation failed: Secrets were required.\n",
        )

        with pytest.raises(BackendError) as exc_info:
            nmcli.connect_new("Home", "wrong")

        assert exc_info.value.reason == "Error: Connection activation failed: Secrets were required."
        assert exc_info.value.details["returncode"] == 4

    def test_failure_without_output(self, nmcli, run):
        run.return_value = completed(returncode=10)

        with pytest.raises(BackendError) as exc_info:
            nmcli.connect_profile("Office")

        assert exc_info.value.reason == "exit status 10"

    def test_timeout(self, run):
        with patch("wifiselect.network.nmcli.shutil.which", return_value=NMCLI):
            backend = NmcliBackend(timeout=5)
        run.side_effect = subprocess.TimeoutExpired(cmd="nmcli", timeout=5)

        with pytest.raises(BackendError, match="timed out"):
            backend.scan()
        assert run.call_args.kwargs["timeout"] == 5

    def test_password_not_logged(self, nmcli, run, caplog):
        with caplog.at_level(logging.DEBUG, logger="wifiselect.network.nmcli"):
            nmcli.connect_new("Home", "hunter22")

        assert "hunter22" not in caplog.text
        assert "password ********" in caplog.text
