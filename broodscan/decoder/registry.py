"""BroodMinder device model registry."""

from dataclasses import dataclass
from types import MappingProxyType

# Model byte values (index 0 of the manufacturer payload)
MODEL_T = 41        # Temperature only (1st gen)
MODEL_TH = 42       # Temperature + humidity (1st gen)
MODEL_W = 43        # Weight scale, 2 load cells (1st gen)
MODEL_T2 = 47       # Temperature + SwarmMinder (T2/T3)
MODEL_W3 = 49       # Weight scale, 4 load cells (W3/W4)
MODEL_SUBHUB = 52   # SubHub BLE relay
MODEL_HUB4G = 54    # Cell hub / Hub 4G
MODEL_TH2 = 56      # Temperature + humidity + SwarmMinder (TH2/TH3)
MODEL_WPLUS = 57    # Weight scale, 2 load cells (W+/W2)
MODEL_DIY = 58      # DIY weight scale, 4 load cells
MODEL_HUBWF = 60    # WiFi hub
MODEL_BEEDAR = 63   # BeeDar flight counter

MODEL_NAMES = MappingProxyType({
    MODEL_T: "T",
    MODEL_TH: "TH",
    MODEL_W: "W",
    MODEL_T2: "T2",
    MODEL_W3: "W3",
    MODEL_SUBHUB: "SubHub",
    MODEL_HUB4G: "Hub4G",
    MODEL_TH2: "TH2",
    MODEL_WPLUS: "W+",
    MODEL_DIY: "DIY",
    MODEL_HUBWF: "HubWF",
    MODEL_BEEDAR: "BeeDar",
})

# (raw / 65536) * 165 - 40 temperature encoding
LEGACY_TEMPERATURE_MODELS = frozenset({MODEL_T, MODEL_TH, MODEL_W})

# Humidity byte is always 0 (or noise) on these
NO_HUMIDITY_MODELS = frozenset({MODEL_T, MODEL_T2, MODEL_W3, MODEL_SUBHUB})

WEIGHT_MODELS = frozenset({MODEL_W, MODEL_WPLUS, MODEL_W3, MODEL_DIY})
FOUR_CELL_MODELS = frozenset({MODEL_W3, MODEL_DIY})
SWARM_MODELS = frozenset({MODEL_T2, MODEL_TH2})


@dataclass(frozen=True)
class ModelCapabilities:
    """What a given model byte tells us about the payload layout."""
    model_id: int
    legacy_temperature_formula: bool
    has_humidity: bool
    has_weight: bool
    has_four_cell: bool
    has_swarm: bool


def classify(model_id: int) -> ModelCapabilities:
    """Return the capability set for a model byte.

    Unknown model bytes get the current-generation defaults: centigrade
    temperature, humidity allowed, no weight and no swarm fields.
    """
    return ModelCapabilities(
        model_id=model_id,
        legacy_temperature_formula=model_id in LEGACY_TEMPERATURE_MODELS,
        has_humidity=model_id not in NO_HUMIDITY_MODELS,
        has_weight=model_id in WEIGHT_MODELS,
        has_four_cell=model_id in FOUR_CELL_MODELS,
        has_swarm=model_id in SWARM_MODELS,
    )


def model_name(model_id: int) -> str:
    """Display name for a model byte, '?(N)' when unknown."""
    return MODEL_NAMES.get(model_id, f"?({model_id})")
