"""Hardware discovery: find the CPU, memory, disks, GPUs, thermal zones,
network interfaces and batteries that the sensors can monitor."""

from __future__ import annotations

import math
import os
import re
import subprocess
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Iterable, Optional, Union

PathLike = Union[str, Path]

CPU_SENSOR_BINARY = "waysensor-cpu"
MEMORY_SENSOR_BINARY = "waysensor-memory"
AMD_GPU_SENSOR_BINARY = "waysensor-amd-gpu"

DEFAULT_MOUNT_POINTS = ("/", "/home", "/boot", "/var", "/tmp")

_VENDOR_NAMES = {"0x1002": "AMD", "0x10de": "NVIDIA", "0x8086": "Intel"}
_INTERFACE_TYPES = {"1": "ethernet", "24": "ethernet", "803": "wireless"}
_INT_RE = re.compile(r"[+-]?[0-9]+")
_U64_MAX = (1 << 64) - 1


@dataclass
class CpuInfo:
    """The processor model, its core count and last reported frequency in Hz."""

    model: str
    cores: int
    threads: int
    max_frequency: Optional[int]
    available: bool


@dataclass
class MemoryInfo:
    """Total RAM and swap in bytes."""

    total_ram: int
    total_swap: int
    available: bool


@dataclass
class DiskInfo:
    """A mounted filesystem and its size in bytes."""

    path: str
    filesystem: str
    total: int
    device: str
    available: bool


@dataclass
class GpuInfo:
    """A graphics card that exposes a metrics file."""

    vendor: str
    model: str
    driver: str
    metrics_path: Optional[str]
    available: bool


@dataclass
class ThermalZone:
    """A kernel thermal zone and its temperature in degrees Celsius."""

    name: str
    type: str
    path: str
    current_temp: Optional[float]
    available: bool


@dataclass
class NetworkInterface:
    """A network interface other than loopback."""

    name: str
    type: str
    speed: Optional[int]
    available: bool


@dataclass
class BatteryInfo:
    """A battery power supply."""

    name: str
    path: str
    capacity: Optional[int]
    status: Optional[str]
    available: bool


@dataclass
class HardwareInfo:
    """Everything that discovery found."""

    cpu: CpuInfo
    memory: MemoryInfo
    disks: list[DiskInfo] = field(default_factory=list)
    gpus: list[GpuInfo] = field(default_factory=list)
    thermal: list[ThermalZone] = field(default_factory=list)
    network: list[NetworkInterface] = field(default_factory=list)
    battery: list[BatteryInfo] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Plain data suitable for JSON or RON output, fields in declaration order."""
        return asdict(self)


def _parse_int(text: str, *, signed: bool, bits: int) -> Optional[int]:
    if not _INT_RE.fullmatch(text):
        return None
    if not signed and text.startswith("-"):
        return None
    value = int(text)
    if signed:
        low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    else:
        low, high = 0, (1 << bits) - 1
    return value if low <= value <= high else None


def _parse_float(text: str) -> Optional[float]:
    if "_" in text:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def _hz_from_mhz(mhz: float) -> int:
    hz = mhz * 1_000_000.0
    if math.isnan(hz) or hz <= 0:
        return 0
    if hz >= _U64_MAX:
        return _U64_MAX
    return int(hz)


def _read_text(path: PathLike) -> Optional[str]:
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None


def _entries(root: PathLike) -> list[Path]:
    try:
        return sorted(Path(root).iterdir(), key=lambda p: p.name)
    except OSError:
        return []


def parse_cpuinfo(text: str, available: bool) -> CpuInfo:
    """Build CPU information from the text of ``/proc/cpuinfo``."""
    model = "Unknown CPU"
    cores = 0
    max_frequency: Optional[int] = None
    for line in text.splitlines():
        parts = line.split(":")
        value = parts[1] if len(parts) > 1 else None
        if line.startswith("model name"):
            if value is not None:
                model = value.strip()
        elif line.startswith("processor"):
            cores += 1
        elif line.startswith("cpu MHz") and value is not None:
            mhz = _parse_float(value.strip())
            if mhz is not None:
                max_frequency = _hz_from_mhz(mhz)
    return CpuInfo(
        model=model,
        cores=cores,
        threads=cores,
        max_frequency=max_frequency,
        available=available,
    )


def parse_meminfo(text: str, available: bool) -> MemoryInfo:
    """Build memory information from the text of ``/proc/meminfo``."""
    total_ram = 0
    total_swap = 0
    for line in text.splitlines():
        parts = line.split()
        if len(parts) < 2:
            continue
        key = parts[0].rstrip(":")
        kib = _parse_int(parts[1], signed=False, bits=64)
        if kib is None:
            continue
        if key == "MemTotal":
            total_ram = kib * 1024
        elif key == "SwapTotal":
            total_swap = kib * 1024
    return MemoryInfo(total_ram=total_ram, total_swap=total_swap, available=available)


def parse_df_output(text: str, mount_point: str) -> Optional[DiskInfo]:
    """Read the first filesystem row of ``df -T`` output, if there is one."""
    for line in text.splitlines()[1:]:
        parts = line.split()
        if len(parts) >= 7:
            blocks = _parse_int(parts[2], signed=False, bits=64) or 0
            return DiskInfo(
                path=mount_point,
                filesystem=parts[1],
                total=blocks * 1024,
                device=parts[0],
                available=True,
            )
    return None


def discover_cpu(
    cpuinfo_path: PathLike = "/proc/cpuinfo", stat_path: PathLike = "/proc/stat"
) -> CpuInfo:
    """Describe the CPU; it is available when the statistics file exists."""
    text = _read_text(cpuinfo_path) or ""
    return parse_cpuinfo(text, Path(stat_path).exists())


def discover_memory(meminfo_path: PathLike = "/proc/meminfo") -> MemoryInfo:
    """Describe the memory; it is available when the meminfo file exists."""
    text = _read_text(meminfo_path) or ""
    return parse_meminfo(text, Path(meminfo_path).exists())


def discover_disks(mount_points: Iterable[str] = DEFAULT_MOUNT_POINTS) -> list[DiskInfo]:
    """Ask ``df`` about each mount point that is a directory."""
    disks = []
    for mount_point in mount_points:
        if not os.path.isdir(mount_point):
            continue
        try:
            result = subprocess.run(["df", "-T", mount_point], capture_output=True, check=False)
        except OSError:
            continue
        stdout = result.stdout
        if isinstance(stdout, bytes):
            try:
                stdout = stdout.decode("utf-8")
            except UnicodeDecodeError:
                continue
        disk = parse_df_output(stdout or "", mount_point)
        if disk is not None:
            disks.append(disk)
    return disks


def discover_gpus(drm_root: PathLike = "/sys/class/drm") -> list[GpuInfo]:
    """Find DRM cards that expose a ``gpu_metrics`` file."""
    gpus = []
    for path in _entries(drm_root):
        name = path.name
        if not name.startswith("card") or "-" in name:
            continue
        device = path / "device"
        metrics = device / "gpu_metrics"
        if not metrics.exists():
            continue
        vendor = (_read_text(device / "vendor") or "").strip()
        device_id = (_read_text(device / "device") or "").strip()
        gpus.append(
            GpuInfo(
                vendor=_VENDOR_NAMES.get(vendor, "Unknown"),
                model=f"GPU {name} ({device_id})",
                driver="amdgpu",
                metrics_path=str(metrics),
                available=True,
            )
        )
    return gpus


def discover_thermal_zones(thermal_root: PathLike = "/sys/class/thermal") -> list[ThermalZone]:
    """List the kernel thermal zones with their current temperatures."""
    zones = []
    for path in _entries(thermal_root):
        name = path.name
        if not name.startswith("thermal_zone"):
            continue
        temp_path = path / "temp"
        zone_type = (_read_text(path / "type") or "").strip()
        raw = _read_text(temp_path)
        millidegrees = None if raw is None else _parse_int(raw.strip(), signed=True, bits=32)
        zones.append(
            ThermalZone(
                name=name,
                type=zone_type,
                path=str(path),
                current_temp=None if millidegrees is None else millidegrees / 1000.0,
                available=temp_path.exists(),
            )
        )
    return zones


def discover_network_interfaces(net_root: PathLike = "/sys/class/net") -> list[NetworkInterface]:
    """List network interfaces, leaving out loopback."""
    interfaces = []
    for path in _entries(net_root):
        name = path.name
        if name == "lo":
            continue
        kind = (_read_text(path / "type") or "").strip()
        raw_speed = _read_text(path / "speed")
        speed = None if raw_speed is None else _parse_int(raw_speed.strip(), signed=False, bits=64)
        interfaces.append(
            NetworkInterface(
                name=name,
                type=_INTERFACE_TYPES.get(kind, "unknown"),
                speed=speed,
                available=(path / "statistics").exists(),
            )
        )
    return interfaces


def discover_batteries(
    power_supply_root: PathLike = "/sys/class/power_supply",
) -> list[BatteryInfo]:
    """List power supplies whose type is ``Battery``."""
    batteries = []
    for path in _entries(power_supply_root):
        supply_type = _read_text(path / "type")
        if supply_type is None or supply_type.strip() != "Battery":
            continue
        capacity_path = path / "capacity"
        raw_capacity = _read_text(capacity_path)
        capacity = (
            None if raw_capacity is None
            else _parse_int(raw_capacity.strip(), signed=False, bits=64)
        )
        status = _read_text(path / "status")
        batteries.append(
            BatteryInfo(
                name=path.name,
                path=str(path),
                capacity=capacity,
                status=None if status is None else status.strip(),
                available=capacity_path.exists(),
            )
        )
    return batteries


def discover_hardware(verbose: bool = False) -> HardwareInfo:
    """Scan every kind of hardware, announcing each step when ``verbose``."""

    def step(label: str) -> None:
        if verbose:
            print(f"🔍 Scanning {label}...")

    step("CPU")
    cpu = discover_cpu()
    step("Memory")
    memory = discover_memory()
    step("Disks")
    disks = discover_disks()
    step("GPUs")
    gpus = discover_gpus()
    step("Thermal Zones")
    thermal = discover_thermal_zones()
    step("Network Interfaces")
    network = discover_network_interfaces()
    step("Batteries")
    battery = discover_batteries()
    return HardwareInfo(
        cpu=cpu,
        memory=memory,
        disks=disks,
        gpus=gpus,
        thermal=thermal,
        network=network,
        battery=battery,
    )


def _sensor_works(command: list[str]) -> Optional[bool]:
    """True or False by exit status, None when the command cannot be started."""
    try:
        result = subprocess.run(command, capture_output=True, check=False)
    except OSError:
        return None
    return result.returncode == 0


def discover_hardware_smart(verbose: bool = False) -> HardwareInfo:
    """Discover hardware, then run each sensor once and mark failing ones unavailable."""
    if verbose:
        print("🧠 Running smart detection with capability testing...")
    hardware = discover_hardware(verbose)
    if verbose:
        print("🧪 Testing sensor capabilities...")

    def report(label: str, works: bool) -> None:
        if verbose:
            print(f"  ✅ {label}: Working" if works else f"  ❌ {label}: Failed")

    works = _sensor_works([CPU_SENSOR_BINARY, "--once"])
    if works is not None:
        report("CPU sensor", works)
        if not works:
            hardware.cpu.available = False

    works = _sensor_works([MEMORY_SENSOR_BINARY, "--once"])
    if works is not None:
        report("Memory sensor", works)
        if not works:
            hardware.memory.available = False

    for gpu in hardware.gpus:
        if gpu.metrics_path is None:
            continue
        works = _sensor_works([AMD_GPU_SENSOR_BINARY, "--once", "--file", gpu.metrics_path])
        if works is not None:
            report(f"GPU sensor ({gpu.model})", works)
            if not works:
                gpu.available = False

    if verbose:
        print("🎯 Smart detection complete!")
    return hardware