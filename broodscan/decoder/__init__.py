"""BroodMinder payload decoding."""

from .advertisement import (
    BROODMINDER_MANUFACTURER_ID,
    MIN_PAYLOAD_LENGTH,
    PayloadTooShortError,
    normalize_address,
    parse_advertisement,
)
from .fields import decode_temperature, decode_weight
from .registry import ModelCapabilities, classify, model_name

__all__ = [
    "BROODMINDER_MANUFACTURER_ID",
    "MIN_PAYLOAD_LENGTH",
    "PayloadTooShortError",
    "normalize_address",
    "parse_advertisement",
    "decode_temperature",
    "decode_weight",
    "ModelCapabilities",
    "classify",
    "model_name",
]
