from dataclasses import dataclass, field

import pytest

from healthprobe.host_metrics import HostOutputError
from healthprobe.host_resources import Disks, Load, Mem
from healthprobe.host_threshold import (
    DEFAULT_DISK_THRESHOLD,
    DEFAULT_LOAD_THRESHOLD,
    DEFAULT_MEM_THRESHOLD,
    Threshold,
)


@dataclass
class FakeServer:
    threshold: Threshold = field(default_factory=Threshold)
    disks: list = field(default_factory=lambda: ["/", "/data"])
    probe_kind: str = "host"
    probe_name: str = "dummy host"


def test_mem_parse_and_usage():
    server = FakeServer()
    mem = Mem()
    mem.configure(server)
    mem.parse(["4407 15718 28.04"])
    assert mem.used == 4407
    assert mem.total == 15718
    assert f"{mem.usage:.2f}" == "28.04"
    assert mem.usage_info() == "Memory: 28.04%"
    assert server.threshold.mem == DEFAULT_MEM_THRESHOLD
    assert mem.check_threshold() == (True, "")


def test_mem_threshold_alert():
    server = FakeServer(threshold=Threshold(mem=0.2))
    mem = Mem()
    mem.configure(server)
    mem.parse(["4407 15718 28.04"])
    assert mem.check_threshold() == (False, "Memory threshold alert!")


@pytest.mark.parametrize("lines", [[], ["4407 15718"]])
def test_mem_bad_parse(lines):
    with pytest.raises(HostOutputError, match="invalid memory output"):
        Mem().parse(lines)


def test_mem_command():
    assert Mem().command().startswith("free -m")
    assert Mem().output_lines() == 1
    assert Mem().name() == "mem"


def test_disks_parse_and_usage():
    server = FakeServer()
    disks = Disks()
    disks.configure(server)
    assert disks.output_lines() == 2
    assert server.threshold.disk == DEFAULT_DISK_THRESHOLD
    disks.parse(["58 97 60% /", "20 80 20% /data"])
    assert (disks.usage[0].used, disks.usage[0].total, disks.usage[0].tag) == (58, 97, "/")
    assert f"{disks.usage[0].usage:.2f}" == "60.00"
    assert (disks.usage[1].used, disks.usage[1].total, disks.usage[1].tag) == (20, 80, "/data")
    assert f"{disks.usage[1].usage:.2f}" == "20.00"
    assert disks.usage_info() == "Disk: `/` 60.00%, `/data` 20.00%"
    assert disks.check_threshold() == (True, "")


def test_disks_threshold_alert():
    server = FakeServer(threshold=Threshold(disk=0.2))
    disks = Disks()
    disks.configure(server)
    disks.parse(["58 97 60% /", "20 80 20% /data"])
    assert disks.check_threshold() == (False, "Disk Space threshold alert! - [/, /data]")


def test_disks_default_mount():
    server = FakeServer(disks=[])
    disks = Disks()
    disks.configure(server)
    assert server.disks == ["/"]
    assert disks.mount == ["/"]
    assert "df -h / 2>/dev/null" in disks.command()


def test_disks_bad_parse():
    disks = Disks(mount=["/", "/data"])
    with pytest.raises(HostOutputError, match="invalid disk output"):
        disks.parse(["58 97 60% /"])
    with pytest.raises(HostOutputError, match="invalid disk output"):
        disks.parse(["58 97 60% /", "58"])


def test_load_default_thresholds():
    server = FakeServer()
    Load().configure(server)
    assert server.threshold.load == {
        "m1": DEFAULT_LOAD_THRESHOLD,
        "m5": DEFAULT_LOAD_THRESHOLD,
        "m15": DEFAULT_LOAD_THRESHOLD,
    }


def test_load_partial_thresholds():
    server = FakeServer(threshold=Threshold(load={"xxx": 0.1}))
    Load().configure(server)
    assert server.threshold.load["m1"] == DEFAULT_LOAD_THRESHOLD
    assert server.threshold.load["m5"] == DEFAULT_LOAD_THRESHOLD
    assert server.threshold.load["m15"] == DEFAULT_LOAD_THRESHOLD


def test_load_case_insensitive_thresholds():
    server = FakeServer(threshold=Threshold(load={"M1": 0.1, "m5": 0.2, "M15": 0.3}))
    load = Load()
    load.configure(server)
    assert server.threshold.load["m1"] == 0.1
    assert server.threshold.load["m5"] == 0.2
    assert server.threshold.load["m15"] == 0.3
    assert load.threshold["m15"] == 0.3


def test_load_parse_fine():
    server = FakeServer(threshold=Threshold(load={"M1": 0.1, "m5": 0.2, "M15": 0.3}))
    load = Load()
    load.configure(server)
    load.parse(["4", "0.00 0.03 0.10"])
    assert load.core == 4
    assert [f"{load.metrics[k]:.2f}" for k in ("m1", "m5", "m15")] == ["0.00", "0.03", "0.10"]
    assert load.usage_info() == "Load: 0.00/0.03/0.10"
    assert load.check_threshold() == (True, "")


def test_load_threshold_alert():
    server = FakeServer(threshold=Threshold(load={"M1": 0.1, "m5": 0.2, "M15": 0.3}))
    load = Load()
    load.configure(server)
    load.parse(["\t4", "\t0.4 0.03 0.10"])
    assert load.check_threshold() == (False, "Load Average threshold m1 alert! - 0.40")


def test_load_bad_parse():
    with pytest.raises(HostOutputError, match="invalid load average output"):
        Load().parse(["0.4 0.03 0.10"])
    with pytest.raises(HostOutputError, match="invalid load average output"):
        Load().parse(["4", "0.00 0.03"])
    assert Load().output_lines() == 2