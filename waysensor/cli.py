"""Command-line hardware discovery and Waybar configuration generator."""

from __future__ import annotations

import argparse
import json
import os
import shutil
import subprocess
import sys
import time
from dataclasses import fields, is_dataclass
from pathlib import Path
from typing import Any, Optional, Sequence

from . import __version__ as _package_version
from . import ron
from .discovery import (
    AMD_GPU_SENSOR_BINARY,
    CPU_SENSOR_BINARY,
    MEMORY_SENSOR_BINARY,
    HardwareInfo,
    discover_hardware,
    discover_hardware_smart,
)

DISK_SENSOR_BINARY = "waysensor-disk"
NETWORK_SENSOR_BINARY = "waysensor-network"
BATTERY_SENSOR_BINARY = "waysensor-battery"
DISCOVER_BINARY = "waysensor-discover"

MODULE_PREFIX = "custom/waysensor"
FORMATS = ("json", "ron", "waybar-config")


def size_to_human(size: int) -> str:
    """Format a byte count with binary units up to TB."""
    units = ("B", "KB", "MB", "GB", "TB")
    amount = float(size)
    index = 0
    while amount >= 1024.0 and index < len(units) - 1:
        amount /= 1024.0
        index += 1
    if index == 0:
        return f"{amount:.0f}{units[index]}"
    return f"{amount:.1f}{units[index]}"


def _indexed_name(base: str, index: int) -> str:
    return base if index == 0 else f"{base}-{index}"


def _disk_module_name(path: str) -> str:
    if path == "/":
        return f"{MODULE_PREFIX}-disk"
    return f"{MODULE_PREFIX}-disk-{path.replace('/', '-')}"


def _gpu_exec(metrics_path: Optional[str]) -> str:
    parts = [AMD_GPU_SENSOR_BINARY, "--once"]
    if metrics_path is not None:
        parts += ["--file", metrics_path]
    return " ".join(parts)


def _is_main_disk(path: str) -> bool:
    return path in ("/", "/home")


def generate_waybar_config(hardware: HardwareInfo) -> dict[str, Any]:
    """Waybar module definitions for every available sensor."""
    modules: dict[str, Any] = {}

    def module(command: str, interval: int) -> dict[str, Any]:
        return {"exec": command, "return-type": "json", "interval": interval, "tooltip": True}

    if hardware.cpu.available:
        modules[f"{MODULE_PREFIX}-cpu"] = module(f"{CPU_SENSOR_BINARY} --once", 1)
    if hardware.memory.available:
        modules[f"{MODULE_PREFIX}-memory"] = module(f"{MEMORY_SENSOR_BINARY} --once", 2)
    for index, gpu in enumerate(hardware.gpus):
        if gpu.available:
            name = _indexed_name(f"{MODULE_PREFIX}-gpu", index)
            modules[name] = module(_gpu_exec(gpu.metrics_path), 2)
    for disk in hardware.disks:
        if disk.available and disk.path not in ("/boot", "/tmp"):
            modules[_disk_module_name(disk.path)] = module(
                f"{DISK_SENSOR_BINARY} --once --path {disk.path}", 30
            )
    for index, battery in enumerate(hardware.battery):
        if battery.available:
            name = _indexed_name(f"{MODULE_PREFIX}-battery", index)
            modules[name] = module(
                f"{BATTERY_SENSOR_BINARY} --once --battery {battery.name}", 10
            )
    return {"modules": modules}


def generate_complete_waybar_config(hardware: HardwareInfo) -> dict[str, Any]:
    """A full Waybar setup: module definitions, suggested order and bar settings."""
    config: dict[str, Any] = {}
    order: list[str] = []

    def add(name: str, command: str, interval: int, icon: Optional[str]) -> None:
        entry: dict[str, Any] = {
            "exec": command,
            "return-type": "json",
            "interval": interval,
            "tooltip": True,
        }
        if icon is None:
            entry["format"] = "{text}"
        else:
            entry["format"] = "{icon} {text}"
            entry["format-icons"] = [icon]
        order.append(name)
        config[name] = entry

    if hardware.cpu.available:
        add(f"{MODULE_PREFIX}-cpu", f"{CPU_SENSOR_BINARY} --once", 1, "🖥️")
    if hardware.memory.available:
        add(f"{MODULE_PREFIX}-memory", f"{MEMORY_SENSOR_BINARY} --once", 2, "🧠")
    for index, gpu in enumerate(hardware.gpus):
        if gpu.available:
            add(_indexed_name(f"{MODULE_PREFIX}-gpu", index), _gpu_exec(gpu.metrics_path), 2, "🎮")
    for disk in hardware.disks:
        if disk.available and _is_main_disk(disk.path):
            add(
                _disk_module_name(disk.path),
                f"{DISK_SENSOR_BINARY} --once --path {disk.path}",
                30,
                "💾",
            )
    for index, battery in enumerate(hardware.battery):
        if battery.available:
            add(
                _indexed_name(f"{MODULE_PREFIX}-battery", index),
                f"{BATTERY_SENSOR_BINARY} --once --battery {battery.name}",
                10,
                None,
            )
    return {
        "modules": config,
        "suggested_modules_right": order,
        "layer": "top",
        "position": "top",
        "height": 30,
        "spacing": 4,
    }


_CSS = """/* waysensor CSS Styling for Waybar */

/* Base styling for all waysensor modules */
[id^="custom/waysensor"] {
    background-color: transparent;
    color: @text;
    border-radius: 6px;
    padding: 0 8px;
    margin: 0 2px;
    transition: all 0.3s ease;
}

/* CPU Sensor */
#custom-waysensor-cpu {
    background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
    color: white;
}

#custom-waysensor-cpu.warning {
    background: linear-gradient(135deg, #f093fb 0%, #f5576c 100%);
}

#custom-waysensor-cpu.critical {
    background: linear-gradient(135deg, #ff6b6b 0%, #ee5a24 100%);
    animation: pulse 2s ease-in-out infinite alternate;
}

/* Memory Sensor */
#custom-waysensor-memory {
    background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
    color: white;
}

#custom-waysensor-memory.warning {
    background: linear-gradient(135deg, #ffecd2 0%, #fcb69f 100%);
    color: #333;
}

#custom-waysensor-memory.critical {
    background: linear-gradient(135deg, #ff6b6b 0%, #ee5a24 100%);
    color: white;
}

/* GPU Sensor */
#custom-waysensor-gpu,
[id^="custom/waysensor-gpu-"] {
    background: linear-gradient(135deg, #11998e 0%, #38ef7d 100%);
    color: white;
}

#custom-waysensor-gpu.warning,
[id^="custom/waysensor-gpu-"].warning {
    background: linear-gradient(135deg, #f093fb 0%, #f5576c 100%);
}

#custom-waysensor-gpu.critical,
[id^="custom/waysensor-gpu-"].critical {
    background: linear-gradient(135deg, #ff6b6b 0%, #ee5a24 100%);
}

/* Disk Sensor */
#custom-waysensor-disk,
[id^="custom/waysensor-disk-"] {
    background: linear-gradient(135deg, #4facfe 0%, #00f2fe 100%);
    color: white;
}

#custom-waysensor-disk.warning,
[id^="custom/waysensor-disk-"].warning {
    background: linear-gradient(135deg, #fdbb2d 0%, #22c1c3 100%);
}

#custom-waysensor-disk.critical,
[id^="custom/waysensor-disk-"].critical {
    background: linear-gradient(135deg, #ff6b6b 0%, #ee5a24 100%);
}

/* Battery Sensor */
#custom-waysensor-battery,
[id^="custom/waysensor-battery-"] {
    background: linear-gradient(135deg, #a8edea 0%, #fed6e3 100%);
    color: #333;
}

#custom-waysensor-battery.warning,
[id^="custom/waysensor-battery-"].warning {
    background: linear-gradient(135deg, #ffecd2 0%, #fcb69f 100%);
}

#custom-waysensor-battery.critical,
[id^="custom/waysensor-battery-"].critical {
    background: linear-gradient(135deg, #ff6b6b 0%, #ee5a24 100%);
    color: white;
}

/* Animations */
@keyframes pulse {
    from {
        opacity: 1;
    }
    to {
        opacity: 0.7;
    }
}

/* Hover effects */
[id^="custom/waysensor"]:hover {
    transform: translateY(-1px);
    box-shadow: 0 4px 8px rgba(0,0,0,0.2);
}

/* Tooltip styling */
tooltip {
    background: rgba(0, 0, 0, 0.8);
    border-radius: 8px;
    padding: 8px;
    color: white;
    font-family: monospace;
    font-size: 12px;
}
"""


def generate_css_styling() -> str:
    """Recommended Waybar CSS for the sensor modules."""
    return _CSS


def required_binaries(hardware: HardwareInfo) -> list[str]:
    """The sensor programs the detected hardware calls for, discovery tool last."""
    binaries = []
    if hardware.cpu.available:
        binaries.append(CPU_SENSOR_BINARY)
    if hardware.memory.available:
        binaries.append(MEMORY_SENSOR_BINARY)
    if any(gpu.available for gpu in hardware.gpus):
        binaries.append(AMD_GPU_SENSOR_BINARY)
    if any(disk.available and _is_main_disk(disk.path) for disk in hardware.disks):
        binaries.append(DISK_SENSOR_BINARY)
    if any(iface.available for iface in hardware.network):
        binaries.append(NETWORK_SENSOR_BINARY)
    if any(battery.available for battery in hardware.battery):
        binaries.append(BATTERY_SENSOR_BINARY)
    binaries.append(DISCOVER_BINARY)
    return binaries


def _binary_installed(name: str) -> bool:
    home = os.environ.get("HOME")
    if home and (Path(home) / ".local" / "bin" / name).exists():
        return True
    return shutil.which(name) is not None


def check_required_binaries(hardware: HardwareInfo) -> list[tuple[str, bool]]:
    """Each required program paired with whether it is installed."""
    return [(name, _binary_installed(name)) for name in required_binaries(hardware)]


_SCRIPT_HEAD = """#!/bin/bash
# waysensor Installation Script
# Generated automatically by waysensor-discover

set -e  # Exit on any error

echo "🚀 waysensor Installation Script"
echo "=============================="
echo ""

# Define install directory
INSTALL_DIR="$HOME/.local/bin"
mkdir -p "$INSTALL_DIR"

# Function to check if a binary exists
check_binary() {
    local binary_name="$1"
    if [ -f "$INSTALL_DIR/$binary_name" ] || command -v "$binary_name" &> /dev/null; then
        return 0
    else
        return 1
    fi
}

# Track what needs to be installed
NEED_INSTALL=false
MISSING_BINARIES=()

echo "🔍 Checking for existing installations..."
echo ""

"""

_SCRIPT_CHECK = """if check_binary "{name}"; then
    echo "  ✅ {name} is already installed"
else
    echo "  ❌ {name} is missing"
    MISSING_BINARIES+=("{name}")
    NEED_INSTALL=true
fi
"""

_SCRIPT_MIDDLE = """
echo ""

# Decide whether to install or skip
if [ "$NEED_INSTALL" = false ]; then
    echo "✅ All required binaries are already installed!"
    echo ""
    echo "📋 Generated Files:"
    echo "  • waysensor-waybar-config.json (waybar configuration)"
    echo "  • waysensor-style.css (CSS styling)"
    echo ""
    echo "🎯 Next Steps:"
    echo "============="
    echo "1. Copy modules from waysensor-waybar-config.json to your waybar config"
    echo "2. Add CSS styling from waysensor-style.css to your waybar CSS"
    echo "3. Restart waybar"
    echo ""
    echo "💡 No installation needed - binaries are already available!"
    exit 0
fi

echo "🔧 Installing missing waysensor sensors..."
echo ""

if ! command -v python3 &> /dev/null; then
    echo "❌ Error: python3 is required but not installed."
    exit 1
fi

echo "Missing binaries that will be installed:"
for binary in "${MISSING_BINARIES[@]}"; do
    echo "  📦 $binary"
done
echo ""

python3 -m pip install --user .

echo ""
echo "📦 Checking installed sensors..."

"""

_SCRIPT_INSTALLED = """if check_binary "{name}"; then
    echo "  ✅ Installed {name}"
fi
"""

_SCRIPT_TAIL = """
echo ""

# Add to PATH if needed
if [[ ":$PATH:" != *":$HOME/.local/bin:"* ]]; then
    echo "📌 Adding ~/.local/bin to PATH..."

    for shell_config in ~/.bashrc ~/.zshrc ~/.profile; do
        if [ -f "$shell_config" ]; then
            echo 'export PATH="$HOME/.local/bin:$PATH"' >> "$shell_config"
            echo "  ✅ Updated $shell_config"
        fi
    done

    echo "   ⚠️  Please restart your shell or run: source ~/.bashrc"
    echo ""
fi

echo "🧪 Testing installation..."
if command -v waysensor-cpu &> /dev/null; then
    echo "  ✅ waysensor sensors are in PATH and working"
else
    echo "  ⚠️  Sensors not found in PATH - you may need to restart your shell"
fi
echo ""

echo "✅ Installation complete!"
echo ""
echo "📋 Generated Files:"
echo "  • waysensor-waybar-config.json (waybar configuration)"
echo "  • waysensor-style.css (CSS styling)"
echo ""
echo "🎯 Quick Start:"
echo "============="
echo ""
echo "1. Test a sensor:"
echo "   waysensor-cpu --once --icon-style nerdfont"
echo ""
echo "2. Add to waybar config:"
echo "   Copy modules from waysensor-waybar-config.json to your waybar config"
echo ""
echo "3. Add CSS styling:"
echo "   Copy waysensor-style.css content to your waybar CSS"
echo ""
echo "4. Restart waybar"
echo ""
echo "🎉 Happy monitoring!"

"""


def generate_install_script(hardware: HardwareInfo) -> str:
    """A shell script that checks for, installs and verifies the needed sensors."""
    binaries = required_binaries(hardware)
    parts = [_SCRIPT_HEAD]
    parts += [_SCRIPT_CHECK.format(name=name) for name in binaries]
    parts.append(_SCRIPT_MIDDLE)
    parts += [_SCRIPT_INSTALLED.format(name=name) for name in binaries]
    parts.append(_SCRIPT_TAIL)
    return "".join(parts)


def _ron_value(value: Any) -> Any:
    if is_dataclass(value):
        out = {}
        for f in fields(value):
            item = getattr(value, f.name)
            converted = _ron_value(item)
            if item is not None and "Optional" in str(f.type):
                converted = ron.Some(converted)
            out[f.name] = converted
        return ron.Struct(out)
    if isinstance(value, list):
        return [_ron_value(item) for item in value]
    return value


def _render(hardware: HardwareInfo, output_format: str) -> str:
    if output_format == "json":
        return json.dumps(hardware.to_dict(), indent=2, ensure_ascii=False)
    if output_format == "ron":
        return ron.dumps(_ron_value(hardware), indent=4)
    if output_format == "waybar-config":
        return json.dumps(generate_waybar_config(hardware), indent=2, ensure_ascii=False)
    raise ValueError(f"Unsupported format: {output_format}")


def _write_executable(path: Path, content: str) -> None:
    path.write_text(content, encoding="utf-8")
    if os.name == "posix":
        os.chmod(path, 0o755)


def build_parser() -> argparse.ArgumentParser:
    """The command-line parser for the discovery tool."""
    parser = argparse.ArgumentParser(
        prog=DISCOVER_BINARY, description="Hardware discovery tool for waysensor sensors"
    )
    parser.add_argument("-f", "--format", default="json",
                        help="Output format: json, ron, waybar-config")
    parser.add_argument("--waybar-config", action="store_true",
                        help="Generate waybar configuration")
    parser.add_argument("--smart", action="store_true",
                        help="Smart detection with capability testing")
    parser.add_argument("--setup", action="store_true", help="Interactive setup wizard")
    parser.add_argument("--complete-config", action="store_true",
                        help="Generate complete waybar config with styling")
    parser.add_argument("--benchmark", action="store_true",
                        help="Test sensor performance and find optimal intervals")
    parser.add_argument("-o", "--output", default=".",
                        help="Output directory for generated files")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument("-V", "--version", action="version",
                        version=f"%(prog)s {_package_version}")
    return parser


def run_setup_wizard(args: argparse.Namespace) -> None:
    """Detect hardware and write a Waybar config, CSS and install script to the current directory."""
    print("🧙 waysensor Setup Wizard")
    print("========================")
    print()
    print("Welcome! This wizard will help you set up waysensor sensors for your system.")
    print("We'll detect your hardware and create a complete waybar configuration.")
    print()
    print("🔍 Step 1: Hardware Detection")
    print("------------------------------")
    hardware = discover_hardware_smart(True)

    print()
    print("📊 Step 2: Sensor Selection")
    print("----------------------------")
    print("Found the following sensors:")
    selected = []
    if hardware.cpu.available:
        print(f"  • CPU Monitor ({hardware.cpu.cores} cores)")
        selected.append("cpu")
    if hardware.memory.available:
        print(f"  • Memory Monitor ({size_to_human(hardware.memory.total_ram)} total)")
        selected.append("memory")
    for index, gpu in enumerate(hardware.gpus):
        if gpu.available:
            print(f"  • GPU Monitor {index + 1} ({gpu.model})")
            selected.append("gpu")
    for disk in hardware.disks:
        if disk.available and _is_main_disk(disk.path):
            print(f"  • Disk Monitor {disk.path} ({size_to_human(disk.total)})")
            selected.append("disk")
    for battery in hardware.battery:
        if battery.available:
            print(f"  • Battery Monitor ({battery.name})")
            selected.append("battery")

    print()
    print("🎨 Step 3: Configuration")
    print("-------------------------")
    print(f"Selected {len(selected)} sensors for monitoring.")
    print("Generating optimal waybar configuration...")
    config = generate_complete_waybar_config(hardware)

    print()
    print("✅ Setup Complete!")
    print("==================")
    print("Generated files:")
    print("  • waybar-config.json - Waybar module configuration")
    print("  • waybar-style.css - Recommended styling")
    print("  • generated-install.sh - Auto-generated installation script")
    print()

    binaries = check_required_binaries(hardware)
    if all(installed for _, installed in binaries):
        print("✅ All required binaries are already installed!")
        print()
        print("To use:")
        print("  1. Copy modules from waybar-config.json to your waybar config")
        print("  2. Add CSS from waybar-style.css to your waybar CSS file")
        print("  3. Restart waybar")
        print()
        print("💡 No need to run the install script - binaries are already available!")
    else:
        print("⚠️  Missing binaries detected:")
        for name, installed in binaries:
            if not installed:
                print(f"  ❌ {name}")
        print()
        print("To use:")
        print("  1. Run: ./generated-install.sh (to install missing binaries)")
        print("  2. Add modules from waybar-config.json to your waybar config")
        print("  3. Add CSS from waybar-style.css to your waybar CSS file")
        print("  4. Restart waybar")

    Path("waybar-config.json").write_text(
        json.dumps(config, indent=2, ensure_ascii=False), encoding="utf-8"
    )
    Path("waybar-style.css").write_text(generate_css_styling(), encoding="utf-8")
    _write_executable(Path("generated-install.sh"), generate_install_script(hardware))


def run_benchmark(args: argparse.Namespace) -> None:
    """Time ten runs of each sensor and suggest an update interval."""
    print("🏃 waysensor Performance Benchmark")
    print("=================================")
    print("Testing sensor performance to find optimal intervals...")
    print()
    sensors = (
        ("CPU", CPU_SENSOR_BINARY),
        ("Memory", MEMORY_SENSOR_BINARY),
        ("AMD GPU", AMD_GPU_SENSOR_BINARY),
        ("Disk", DISK_SENSOR_BINARY),
    )
    for label, binary in sensors:
        print(f"Testing {label} sensor... ", end="", flush=True)
        total = 0.0
        successes = 0
        for _ in range(10):
            start = time.perf_counter()
            try:
                result = subprocess.run([binary, "--once"], capture_output=True, check=False)
            except OSError:
                continue
            if result.returncode == 0:
                total += time.perf_counter() - start
                successes += 1
        if successes:
            average_ms = int(total / successes * 1000)
            recommended = max(average_ms * 10, 100)
            print(f"✅ Avg: {average_ms}ms, Recommended interval: {recommended}ms")
        else:
            print("❌ Not available")

    print()
    print("💡 Recommendations:")
    print("  • CPU: 1000ms (responsive)")
    print("  • Memory: 2000ms (balanced)")
    print("  • GPU: 1500ms (smooth)")
    print("  • Disk: 5000ms (efficiency)")
    print("  • Network: 1000ms (real-time)")
    print("  • Battery: 10000ms (power saving)")


def generate_complete_waybar_setup(hardware: HardwareInfo, args: argparse.Namespace) -> None:
    """Write the config, CSS and install script into the output directory."""
    print("🎯 Generating Complete Waybar Setup")
    print("====================================")
    output_dir = Path(args.output)
    output_dir.mkdir(parents=True, exist_ok=True)
    config_path = output_dir / "waysensor-waybar-config.json"
    css_path = output_dir / "waysensor-style.css"
    install_path = output_dir / "install-waysensor.sh"

    config_path.write_text(
        json.dumps(generate_complete_waybar_config(hardware), indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
    css_path.write_text(generate_css_styling(), encoding="utf-8")
    _write_executable(install_path, generate_install_script(hardware))

    print(f"✅ Generated files in '{args.output}':")
    print(f"  📄 {config_path} - Waybar module configuration")
    print(f"  🎨 {css_path} - CSS styling")
    print(f"  🚀 {install_path} - Installation script")
    print()
    print("🔧 To install:")
    print(f"  cd {args.output}")
    print("  ./install-waysensor.sh")
    print()
    print("📋 Add to your waybar config:")
    print('  "modules-right": ["custom/waysensor-cpu", "custom/waysensor-memory", ...]')


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the discovery tool; returns the process exit status."""
    args = build_parser().parse_args(argv)
    print("🔍 waysensor Hardware Discovery & Configuration")
    print("=============================================")
    try:
        if args.setup:
            run_setup_wizard(args)
            return 0
        if args.benchmark:
            run_benchmark(args)
            return 0
        hardware = discover_hardware_smart(args.verbose) if args.smart else discover_hardware(
            args.verbose
        )
        if args.complete_config:
            generate_complete_waybar_setup(hardware, args)
            return 0
        if args.format not in FORMATS:
            print(f"Unsupported format: {args.format}", file=sys.stderr)
            return 1
        print(_render(hardware, args.format))
    except (OSError, ron.RonError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.waybar_config:
        print("\n📋 Suggested waybar configuration:")
        print("   1. Copy the JSON above to your waybar config")
        print("   2. Add the module names to your waybar 'modules-left/center/right'")
        print("   3. Customize intervals and styling as needed")
        print("\n💡 Tip: Use --complete-config for a full waybar setup with styling!")
    return 0


if __name__ == "__main__":
    sys.exit(main())