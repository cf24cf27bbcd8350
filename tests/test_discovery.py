import json
import subprocess
from pathlib import Path
from unittest import mock

from waysensor import discovery
from waysensor.discovery import (
    BatteryInfo,
    CpuInfo,
    HardwareInfo,
    MemoryInfo,
    discover_batteries,
    discover_cpu,
    discover_disks,
    discover_gpus,
    discover_hardware_smart,
    discover_memory,
    discover_network_interfaces,
    discover_thermal_zones,
    parse_cpuinfo,
    parse_df_output,
    parse_meminfo,
)

CPUINFO = """processor\t: 0
model name\t: Example Processor 9000
cpu MHz\t\t: 2400.000

processor\t: 1
model name\t: Example Processor 9000
cpu MHz\t\t: 2400.000
"""

MEMINFO = """MemTotal:        1024 kB
MemFree:          512 kB
SwapTotal:       1024 kB
Garbage
"""

DF_OUTPUT = """Filesystem     Type 1K-blocks    Used Available Use% Mounted on
/dev/sda1      ext4      1024     100       924  10% /
"""


def write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_parse_cpuinfo_counts_processors_and_frequency():
    cpu = parse_cpuinfo(CPUINFO, True)
    assert cpu.model == "Example Processor 9000"
    assert cpu.cores == 2
    assert cpu.threads == cpu.cores
    assert cpu.max_frequency == 2400000000
    assert cpu.available is True


def test_parse_cpuinfo_empty_text_gives_defaults():
    cpu = parse_cpuinfo("", False)
    assert cpu == CpuInfo("Unknown CPU", 0, 0, None, False)


def test_parse_cpuinfo_ignores_unparsable_frequency():
    cpu = parse_cpuinfo("cpu MHz : fast\n", True)
    assert cpu.max_frequency is None


def test_parse_meminfo_converts_kib_to_bytes():
    memory = parse_meminfo(MEMINFO, True)
    assert memory.total_ram == 1048576
    assert memory.total_swap == 1048576
    assert memory.available is True


def test_parse_meminfo_without_totals_is_zero():
    assert parse_meminfo("MemFree: 10 kB\n", False) == MemoryInfo(0, 0, False)


def test_parse_df_output_reads_first_row():
    disk = parse_df_output(DF_OUTPUT, "/")
    assert disk is not None
    assert disk.device == "/dev/sda1"
    assert disk.filesystem == "ext4"
    assert disk.total == 1048576
    assert disk.path == "/"
    assert disk.available is True


def test_parse_df_output_header_only_gives_none():
    assert parse_df_output(DF_OUTPUT.splitlines()[0], "/") is None


def test_discover_cpu_from_files(tmp_path):
    info = write(tmp_path / "cpuinfo", CPUINFO)
    stat = write(tmp_path / "stat", "cpu 1 2 3\n")
    cpu = discover_cpu(info, stat)
    assert cpu.cores == 2
    assert cpu.available is True


def test_discover_cpu_missing_files(tmp_path):
    cpu = discover_cpu(tmp_path / "nope", tmp_path / "nostat")
    assert cpu.model == "Unknown CPU"
    assert cpu.available is False


def test_discover_memory_from_file(tmp_path):
    memory = discover_memory(write(tmp_path / "meminfo", MEMINFO))
    assert memory.total_ram == 1048576
    assert memory.available is True
    assert discover_memory(tmp_path / "missing").available is False


def test_discover_disks_skips_missing_mount_points(tmp_path):
    assert discover_disks([str(tmp_path / "does-not-exist")]) == []


def test_discover_disks_uses_df(tmp_path):
    completed = subprocess.CompletedProcess(["df"], 0, DF_OUTPUT.encode(), b"")
    with mock.patch("waysensor.discovery.subprocess.run", return_value=completed) as run:
        disks = discover_disks([str(tmp_path)])
    assert run.call_args[0][0] == ["df", "-T", str(tmp_path)]
    assert len(disks) == 1
    assert disks[0].path == str(tmp_path)
    assert disks[0].total == 1048576


def test_discover_gpus(tmp_path):
    card = tmp_path / "card0" / "device"
    write(card / "gpu_metrics", "")
    write(card / "vendor", "0x1002\n")
    write(card / "device", "0x73bf\n")
    write(tmp_path / "card0-DP-1" / "device" / "gpu_metrics", "")
    write(tmp_path / "card1" / "device" / "vendor", "0x10de\n")
    gpus = discover_gpus(tmp_path)
    assert len(gpus) == 1
    gpu = gpus[0]
    assert gpu.vendor == "AMD"
    assert gpu.model == "GPU card0 (0x73bf)"
    assert gpu.driver == "amdgpu"
    assert gpu.metrics_path == str(card / "gpu_metrics")
    assert gpu.available is True


def test_discover_gpus_unknown_vendor(tmp_path):
    write(tmp_path / "card2" / "device" / "gpu_metrics", "")
    assert [g.vendor for g in discover_gpus(tmp_path)] == ["Unknown"]


def test_discover_gpus_missing_root(tmp_path):
    assert discover_gpus(tmp_path / "absent") == []


def test_discover_thermal_zones(tmp_path):
    write(tmp_path / "thermal_zone0" / "type", "x86_pkg_temp\n")
    write(tmp_path / "thermal_zone0" / "temp", "45000\n")
    write(tmp_path / "thermal_zone1" / "type", "acpitz\n")
    write(tmp_path / "cooling_device0" / "type", "fan\n")
    zones = discover_thermal_zones(tmp_path)
    assert [z.name for z in zones] == ["thermal_zone0", "thermal_zone1"]
    hot, cold = zones
    assert hot.type == "x86_pkg_temp"
    assert hot.current_temp * 1000 == 45000
    assert hot.available is True
    assert cold.current_temp is None
    assert cold.available is False


def test_discover_network_interfaces(tmp_path):
    write(tmp_path / "lo" / "type", "772\n")
    write(tmp_path / "eth0" / "type", "1\n")
    write(tmp_path / "eth0" / "speed", "1000\n")
    (tmp_path / "eth0" / "statistics").mkdir()
    write(tmp_path / "wlan0" / "type", "803\n")
    write(tmp_path / "wlan0" / "speed", "-1\n")
    write(tmp_path / "tun0" / "type", "65534\n")
    by_name = {i.name: i for i in discover_network_interfaces(tmp_path)}
    assert set(by_name) == {"eth0", "wlan0", "tun0"}
    assert by_name["eth0"].type == "ethernet"
    assert by_name["eth0"].speed == 1000
    assert by_name["eth0"].available is True
    assert by_name["wlan0"].type == "wireless"
    assert by_name["wlan0"].speed is None
    assert by_name["wlan0"].available is False
    assert by_name["tun0"].type == "unknown"


def test_discover_batteries(tmp_path):
    write(tmp_path / "BAT0" / "type", "Battery\n")
    write(tmp_path / "BAT0" / "capacity", "87\n")
    write(tmp_path / "BAT0" / "status", "Discharging\n")
    write(tmp_path / "AC" / "type", "Mains\n")
    batteries = discover_batteries(tmp_path)
    assert batteries == [
        BatteryInfo(
            name="BAT0",
            path=str(tmp_path / "BAT0"),
            capacity=87,
            status="Discharging",
            available=True,
        )
    ]


def test_hardware_to_dict_round_trips_through_json():
    hardware = HardwareInfo(
        cpu=parse_cpuinfo(CPUINFO, True),
        memory=parse_meminfo(MEMINFO, True),
        disks=[parse_df_output(DF_OUTPUT, "/")],
    )
    data = hardware.to_dict()
    assert list(data) == ["cpu", "memory", "disks", "gpus", "thermal", "network", "battery"]
    assert json.loads(json.dumps(data)) == data
    assert data["cpu"]["max_frequency"] == 2400000000
    assert data["disks"][0]["device"] == "/dev/sda1"


def test_smart_discovery_marks_failing_sensors_unavailable():
    failed = subprocess.CompletedProcess(["x"], 1, b"", b"")
    with mock.patch("waysensor.discovery.subprocess.run", return_value=failed):
        hardware = discover_hardware_smart(False)
    assert hardware.cpu.available is False
    assert hardware.memory.available is False
    assert all(not gpu.available for gpu in hardware.gpus if gpu.metrics_path)
    assert hardware.disks == []


def test_smart_discovery_keeps_availability_when_sensors_missing():
    with mock.patch("waysensor.discovery.subprocess.run", side_effect=OSError("missing")):
        hardware = discover_hardware_smart(False)
    assert hardware.cpu.available == discovery.discover_cpu().available
    assert hardware.memory.available == discovery.discover_memory().available


def test_smart_discovery_verbose_reports(capsys):
    ok = subprocess.CompletedProcess(["x"], 0, b"", b"")
    with mock.patch("waysensor.discovery.subprocess.run", return_value=ok):
        discover_hardware_smart(True)
    out = capsys.readouterr().out
    assert "CPU sensor: Working" in out
    assert "Memory sensor: Working" in out
    assert "Scanning CPU" in out