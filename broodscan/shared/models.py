"""Core data models for BroodMinder readings."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Reading:
    """A decoded BroodMinder advertisement.

    Built once by the advertisement parser and never modified. Physical
    values are already rounded: 2 decimals for Celsius and kilograms,
    1 decimal for Fahrenheit.
    """
    address: str
    rssi: int
    model_id: int
    model_name: str
    firmware_major: int
    firmware_minor: int
    battery_percent: int
    sample_counter: int
    temperature_c: float
    temperature_f: float
    timestamp: datetime
    humidity_percent: Optional[int] = None
    weight_left: Optional[float] = None
    weight_right: Optional[float] = None
    weight_total: Optional[float] = None
    weight_left_2: Optional[float] = None
    weight_right_2: Optional[float] = None
    realtime_temperature_c: Optional[float] = None
    realtime_temperature_f: Optional[float] = None
    realtime_weight: Optional[float] = None
    swarm_state: Optional[int] = None
    swarm_time: Optional[int] = None

    @property
    def firmware(self) -> str:
        """Firmware version as 'major.minor' with a two digit minor."""
        return f"{self.firmware_major}.{self.firmware_minor:02d}"

    @property
    def has_humidity(self) -> bool:
        return self.humidity_percent is not None

    @property
    def has_weight(self) -> bool:
        return self.weight_total is not None

    @property
    def has_four_cell(self) -> bool:
        return self.weight_left_2 is not None

    @property
    def has_realtime(self) -> bool:
        return self.realtime_temperature_c is not None

    @property
    def has_swarm(self) -> bool:
        return self.swarm_state is not None

    def to_dict(self) -> Dict[str, Any]:
        """Build the JSON record for this reading.

        Keys after has_weight are only included when non-zero, so a
        present but zero weight cell or swarm state is omitted.
        """
        record: Dict[str, Any] = {
            "mac": self.address,
            "rssi": self.rssi,
            "model": self.model_name,
            "model_byte": self.model_id,
            "firmware": self.firmware,
            "battery_percent": self.battery_percent,
            "sample_counter": self.sample_counter,
            "temperature_c": self.temperature_c,
            "temperature_f": self.temperature_f,
            "has_humidity": self.has_humidity,
            "humidity_pct": self.humidity_percent if self.has_humidity else 0,
            "has_weight": self.has_weight,
        }
        optional = {
            "weight_left": self.weight_left,
            "weight_right": self.weight_right,
            "weight_total": self.weight_total,
            "has_4cell": self.has_four_cell,
            "weight_left_2": self.weight_left_2,
            "weight_right_2": self.weight_right_2,
            "has_realtime": self.has_realtime,
            "realtime_temp_c": self.realtime_temperature_c,
            "realtime_temp_f": self.realtime_temperature_f,
            "realtime_weight": self.realtime_weight,
            "has_swarm": self.has_swarm,
            "swarm_state": self.swarm_state,
            "swarm_time": self.swarm_time,
        }
        # Zero, False and missing values are left out of the record
        record.update((key, value) for key, value in optional.items() if value)
        record["timestamp"] = self.timestamp.isoformat()
        return record
