"""BroodMinder BLE advertisement scanner."""

__version__ = "0.1.0"
