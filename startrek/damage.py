"""
Damage control model for the ship's eight devices.

Each device carries a signed damage value:
- 0 means operational
- negative means damaged, the magnitude being the estimated days until
  the device repairs itself

Repairs progress with elapsed travel/rest time. Every repair pass also
has a small chance of knocking out a random device.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

from .config import RANDOM_FAILURE_CHANCE, REPAIR_FLOOR
from .events import EventLog


class Device(IntEnum):
    """Ship devices, in damage-report order."""
    WARP_ENGINES = 0
    SHORT_RANGE_SENSORS = 1
    LONG_RANGE_SENSORS = 2
    PHASER_CONTROL = 3
    PHOTON_TUBES = 4
    DAMAGE_CONTROL = 5
    SHIELD_CONTROL = 6
    LIBRARY_COMPUTER = 7


DEVICE_NAMES: dict[Device, str] = {
    Device.WARP_ENGINES: "WARP ENGINES",
    Device.SHORT_RANGE_SENSORS: "SHORT RANGE SENSORS",
    Device.LONG_RANGE_SENSORS: "LONG RANGE SENSORS",
    Device.PHASER_CONTROL: "PHASER CONTROL",
    Device.PHOTON_TUBES: "PHOTON TUBES",
    Device.DAMAGE_CONTROL: "DAMAGE CONTROL",
    Device.SHIELD_CONTROL: "SHIELD CONTROL",
    Device.LIBRARY_COMPUTER: "LIBRARY-COMPUTER",
}

# Docked repair order: hours per damaged device, plus a fixed setup estimate
REPAIR_TIME_PER_DEVICE = 0.1
REPAIR_ESTIMATE_OVERHEAD = 0.2


@dataclass(frozen=True)
class DamageReportItem:
    """One row of the damage control report."""
    name: str
    value: float

    def __str__(self) -> str:
        return f"{self.name.ljust(25)} {format_damage_value(self.value)}"


def format_damage_value(value: float) -> str:
    """Render a damage value truncated (floored) to two decimals."""
    floored = int(value * 100 // 1) / 100
    if floored == int(floored):
        return str(int(floored))
    return f"{floored:g}"


class DamageModel:
    """
    Tracks device damage, repairs it over time and injects failures.

    Attributes:
        values: Damage value per device (index = Device).
    """

    def __init__(self, log: EventLog, rng: Optional[random.Random] = None):
        self.log = log
        self.rng = rng or random.Random()
        self.values: list[float] = [0.0] * len(Device)

    def reset(self) -> None:
        self.values = [0.0] * len(Device)

    def is_damaged(self, device: Device) -> bool:
        return self.values[device] < 0

    def damaged_devices(self) -> list[Device]:
        return [d for d in Device if self.values[d] < 0]

    def set_damage(self, device: Device, value: float) -> None:
        self.values[device] = value

    def repair_system(self, time: float) -> None:
        """
        Progress repairs by `time` stardates and roll for a random failure.

        A device under repair never reads exactly 0 until its repair
        finishes: intermediate values are floored at -0.1.

        Args:
            time: Stardates elapsed.
        """
        for device in Device:
            if self.values[device] >= 0:
                continue
            value = self.values[device] + time
            if REPAIR_FLOOR < value < 0:
                value = REPAIR_FLOOR
            if value >= 0:
                value = 0.0
                self.log.print(
                    f"DAMAGE CONTROL REPORT: {DEVICE_NAMES[device]} REPAIR COMPLETED."
                )
            self.values[device] = value

        if self.rng.random() < RANDOM_FAILURE_CHANCE:
            device = Device(int(self.rng.random() * len(Device)))
            self.values[device] -= self.rng.random() * 5 + 1
            self.log.print("--- RANDOM SYSTEM FAILURE ---")
            self.log.print(f"DAMAGE CONTROL REPORT: {DEVICE_NAMES[device]} DAMAGED")

    def repair_all(self) -> None:
        """Instantly restore every device (starbase technicians)."""
        self.reset()

    def estimated_repair_time(self) -> float:
        """Starbase repair estimate: 0.1 per damaged device plus overhead."""
        damaged = len(self.damaged_devices())
        return REPAIR_TIME_PER_DEVICE * damaged + REPAIR_ESTIMATE_OVERHEAD

    def report(self) -> list[DamageReportItem]:
        """Name and value for all eight devices."""
        return [DamageReportItem(DEVICE_NAMES[d], self.values[d]) for d in Device]

    def print_report(self) -> None:
        self.log.print("DEVICE             STATE OF REPAIR")
        for item in self.report():
            self.log.print(str(item))
