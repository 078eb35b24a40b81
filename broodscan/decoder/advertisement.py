"""Parser for BroodMinder manufacturer-specific advertisement data."""

import math
import re
import struct
from datetime import datetime
from typing import Optional

from broodscan.shared.models import Reading

from .fields import (
    celsius_to_fahrenheit,
    decode_realtime_temperature,
    decode_realtime_weight,
    decode_temperature,
    decode_weight,
)
from .registry import classify, model_name

# BroodMinder company identifier (IF, LLC)
BROODMINDER_MANUFACTURER_ID = 0x028D

MIN_PAYLOAD_LENGTH = 15

_BARE_MAC = re.compile(r"^[0-9A-F]{12}$")


class PayloadTooShortError(ValueError):
    """Raised when a payload cannot hold the fixed header fields."""

    def __init__(self, length: int, minimum: int = MIN_PAYLOAD_LENGTH):
        self.length = length
        self.minimum = minimum
        super().__init__(
            f"payload too short: got {length} bytes, need at least {minimum}"
        )


def normalize_address(address: str) -> str:
    """Uppercase a device address and separate octets with colons."""
    normalized = address.strip().upper().replace("-", ":")
    if _BARE_MAC.match(normalized):
        normalized = ":".join(normalized[i:i + 2] for i in range(0, 12, 2))
    return normalized


def _u16(data: bytes, offset: int) -> int:
    return struct.unpack_from("<H", data, offset)[0]


def _round(value: float, digits: int) -> float:
    """Round half away from zero, e.g. 34.25 -> 34.3."""
    scale = 10.0 ** digits
    rounded = math.copysign(math.floor(abs(value) * scale + 0.5), value) / scale
    # Adding 0.0 turns -0.0 into 0.0
    return rounded + 0.0


def parse_advertisement(
    address: str,
    rssi: int,
    payload: bytes,
    timestamp: Optional[datetime] = None,
) -> Reading:
    """Decode one BroodMinder payload into a Reading.

    The payload starts right after the company identifier, so index 0 is
    the model byte. Multi-byte fields are little-endian:

        0      model
        1      firmware minor
        2      firmware major
        3      realtime temperature low byte
        4      battery %
        5-6    sample counter
        7-8    temperature
        9      realtime temperature high byte
        10-11  weight left
        12-13  weight right
        14     humidity %
        15-16  weight left 2  / swarm time low word
        17-18  weight right 2 / swarm time high word
        19-20  realtime total weight / swarm state (byte 19)

    Args:
        address: Device address as reported by the BLE stack.
        rssi: Signal strength in dBm.
        payload: Manufacturer data without the company identifier.
        timestamp: Capture time, defaults to now.

    Returns:
        The decoded Reading.

    Raises:
        PayloadTooShortError: If payload is shorter than 15 bytes.
    """
    data = bytes(payload)
    if len(data) < MIN_PAYLOAD_LENGTH:
        raise PayloadTooShortError(len(data))

    model_id = data[0]
    caps = classify(model_id)

    temperature_c = _round(decode_temperature(caps, _u16(data, 7)), 2)
    fields = {
        "address": normalize_address(address),
        "rssi": int(rssi),
        "model_id": model_id,
        "model_name": model_name(model_id),
        "firmware_minor": data[1],
        "firmware_major": data[2],
        "battery_percent": min(data[4], 100),
        "sample_counter": _u16(data, 5),
        "temperature_c": temperature_c,
        "temperature_f": _round(celsius_to_fahrenheit(temperature_c), 1),
        "timestamp": timestamp or datetime.now(),
    }

    realtime_c = decode_realtime_temperature(caps, data[3], data[9])
    if realtime_c is not None:
        realtime_c = _round(realtime_c, 2)
        fields["realtime_temperature_c"] = realtime_c
        fields["realtime_temperature_f"] = _round(celsius_to_fahrenheit(realtime_c), 1)

    left, left_ok = decode_weight(caps, _u16(data, 10))
    right, right_ok = decode_weight(caps, _u16(data, 12))
    if left_ok or right_ok:
        fields["weight_left"] = _round(left, 2)
        fields["weight_right"] = _round(right, 2)
        fields["weight_total"] = _round(fields["weight_left"] + fields["weight_right"], 2)

    # Noise on models without a humidity sensor
    if caps.has_humidity and data[14] <= 100:
        fields["humidity_percent"] = data[14]

    if caps.has_four_cell:
        if len(data) >= 19:
            left2, left2_ok = decode_weight(caps, _u16(data, 15))
            right2, right2_ok = decode_weight(caps, _u16(data, 17))
            if left2_ok or right2_ok:
                fields["weight_left_2"] = _round(left2, 2)
                fields["weight_right_2"] = _round(right2, 2)
                fields["weight_total"] = _round(
                    fields.get("weight_left", 0.0)
                    + fields.get("weight_right", 0.0)
                    + fields["weight_left_2"]
                    + fields["weight_right_2"],
                    2,
                )
                # A four-cell reading always carries the first pair too
                fields.setdefault("weight_left", 0.0)
                fields.setdefault("weight_right", 0.0)
    elif caps.has_swarm:
        if len(data) >= 20:
            fields["swarm_time"] = struct.unpack_from("<I", data, 15)[0]
            fields["swarm_state"] = data[19]

    if caps.has_weight and len(data) >= 21:
        realtime_weight = decode_realtime_weight(caps, _u16(data, 19))
        if realtime_weight is not None:
            fields["realtime_weight"] = _round(realtime_weight, 2)

    return Reading(**fields)
