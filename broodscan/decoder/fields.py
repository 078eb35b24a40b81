"""Decoders for individual BroodMinder payload fields.

All functions here are pure and total over the uint16 range. Invalid or
missing values are signalled through the return value, never by raising.
"""

from typing import Optional, Tuple

from .registry import ModelCapabilities

TEMPERATURE_SENTINEL = 0xFFFF

# No load cell attached / factory default
WEIGHT_SENTINELS = frozenset({0x7FFF, 0x8005, 0xFFFF})
WEIGHT_ZERO_OFFSET = 32767


def decode_temperature(capabilities: ModelCapabilities, raw: int) -> float:
    """Convert a raw 16-bit temperature to Celsius.

    Legacy models (T/TH/W) use the SHT-like formula
    ``(raw / 65536) * 165 - 40``; everything newer encodes centigrade
    with a 5000 offset, ``(raw - 5000) / 100``. The 0xFFFF sentinel
    decodes to 0.0 for every model.
    """
    if raw == TEMPERATURE_SENTINEL:
        return 0.0
    if capabilities.legacy_temperature_formula:
        return (raw / 65536.0) * 165.0 - 40.0
    return (raw - 5000.0) / 100.0


def decode_weight(capabilities: ModelCapabilities, raw: int) -> Tuple[float, bool]:
    """Convert a raw 16-bit load cell value to kilograms.

    Returns:
        Tuple of (kg, valid). Non-weight models and sentinel values give
        (0.0, False). Values slightly below the zero offset decode to small
        negative weights.
    """
    if not capabilities.has_weight:
        return 0.0, False
    if raw in WEIGHT_SENTINELS:
        return 0.0, False
    return (raw - WEIGHT_ZERO_OFFSET) / 100.0, True


def decode_realtime_temperature(
    capabilities: ModelCapabilities,
    low: int,
    high: int,
) -> Optional[float]:
    """Assemble and decode the split realtime temperature.

    Only current-generation models carry it; a combined value of 0 or
    0xFFFF means the field is absent.
    """
    if capabilities.legacy_temperature_formula:
        return None
    raw = (low & 0xFF) | ((high & 0xFF) << 8)
    if raw in (0, TEMPERATURE_SENTINEL):
        return None
    return decode_temperature(capabilities, raw)


def decode_realtime_weight(capabilities: ModelCapabilities, raw: int) -> Optional[float]:
    """Decode the realtime total weight of current-generation scales."""
    if capabilities.legacy_temperature_formula:
        return None
    kg, valid = decode_weight(capabilities, raw)
    return kg if valid else None


def celsius_to_fahrenheit(celsius: float) -> float:
    return celsius * 9.0 / 5.0 + 32.0
