"""BLE advertisement listener built on bleak."""

import logging
from typing import Callable, Optional

from bleak import BleakScanner
from bleak.backends.device import BLEDevice
from bleak.backends.scanner import AdvertisementData

from .config import ScannerConfig

logger = logging.getLogger(__name__)

AdvertisementCallback = Callable[[str, int, bytes], None]


class AdvertisementListener:
    """Passively listens for advertisements from one manufacturer.

    Every advertisement carrying manufacturer data for the configured
    company id is handed to the callback as (address, rssi, payload),
    with the company id already stripped by bleak.
    """

    def __init__(self, config: ScannerConfig, on_advertisement: AdvertisementCallback):
        """Initialize the listener.

        Args:
            config: Scanner configuration.
            on_advertisement: Callback for matching advertisements.
                Args: (address, rssi, manufacturer_payload)
        """
        self.config = config
        self.on_advertisement = on_advertisement
        self._scanner: Optional[BleakScanner] = None

    def _detection_callback(self, device: BLEDevice, adv_data: AdvertisementData):
        payload = (adv_data.manufacturer_data or {}).get(self.config.manufacturer_id)
        if payload is None:
            return
        logger.debug(f"Advertisement from {device.address}: {bytes(payload).hex()}")
        self.on_advertisement(device.address, adv_data.rssi, bytes(payload))

    async def start(self):
        """Start scanning."""
        kwargs = {}
        if self.config.adapter:
            kwargs["adapter"] = self.config.adapter

        scanner = BleakScanner(
            detection_callback=self._detection_callback,
            **kwargs,
        )
        logger.info(
            f"Starting BLE scan for manufacturer id 0x{self.config.manufacturer_id:04X}"
        )
        await scanner.start()
        self._scanner = scanner

    async def stop(self):
        """Stop scanning."""
        if self._scanner:
            await self._scanner.stop()
            self._scanner = None
            logger.info("BLE scan stopped")
