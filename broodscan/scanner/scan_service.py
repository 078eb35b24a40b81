"""BroodMinder scan service - main orchestrator."""

import asyncio
import logging
import signal
import sys
from typing import Optional

from bleak.exc import BleakError
from rich.console import Console

from broodscan.decoder import PayloadTooShortError, parse_advertisement
from broodscan.shared.models import Reading

from .config import ScannerConfig
from .listener import AdvertisementListener
from .render import ReadingRenderer
from .tracker import ReadingTracker

logger = logging.getLogger(__name__)

SUPPORTED_MODELS = "T, TH, W, T2/T3, TH2/TH3, W+, W3/W4, DIY, SubHub, BeeDar, Hub"


class ScanService:
    """Feeds advertisements through the decoder, dedup and renderer."""

    def __init__(
        self,
        config: ScannerConfig,
        renderer: Optional[ReadingRenderer] = None,
        tracker: Optional[ReadingTracker] = None,
        listener: Optional[AdvertisementListener] = None,
        status_console: Optional[Console] = None,
    ):
        """Initialize the scan service.

        Args:
            config: Scanner configuration.
            renderer: Output renderer, built from config if omitted.
            tracker: Dedup tracker, a fresh one if omitted.
            listener: BLE listener, a bleak-backed one if omitted.
            status_console: Console for status messages (stderr by default).
        """
        self.config = config
        self.renderer = renderer or ReadingRenderer(
            celsius=config.celsius,
            json_output=config.json_output,
        )
        self.tracker = tracker or ReadingTracker()
        self.listener = listener or AdvertisementListener(config, self.handle_advertisement)
        self.status_console = status_console or Console(stderr=True, highlight=False)
        self.poll_interval = 0.2
        self._running = False

    def _status(self, message: str):
        """Print a human facing status line unless emitting JSON."""
        if not self.config.json_output:
            self.status_console.print(message, markup=False)

    def handle_advertisement(self, address: str, rssi: int, payload: bytes) -> Optional[Reading]:
        """Process one manufacturer payload.

        Returns:
            The rendered Reading, or None if it was dropped.
        """
        try:
            reading = parse_advertisement(address, rssi, payload)
        except PayloadTooShortError as e:
            logger.warning(f"Parse error for {address}: {e}")
            return None

        if not self.config.show_all and not self.tracker.admit(
            reading.address, reading.sample_counter
        ):
            return None

        ordinal = self.tracker.discover(reading.address)
        if ordinal is not None:
            logger.debug(f"New device {reading.address} ({reading.model_name})")
            self._status(
                f"Discovered BroodMinder device #{ordinal}: "
                f"{reading.address} ({reading.model_name})"
            )

        self.renderer.render(reading)
        return reading

    def _setup_signal_handlers(self):
        """Set up signal handlers for graceful shutdown."""
        def signal_handler(signum, frame):
            signame = signal.Signals(signum).name
            logger.info(f"Received {signame}, stopping scan...")
            self._running = False

        return {
            signum: signal.signal(signum, signal_handler)
            for signum in (signal.SIGTERM, signal.SIGINT)
        }

    def stop(self):
        """Ask the scan loop to finish."""
        self._running = False

    async def run(self):
        """Scan until the configured duration elapses or a signal arrives."""
        previous_handlers = self._setup_signal_handlers()
        self._running = True

        self._status("Scanning for BroodMinder BLE devices...")
        self._status(f"Supported models: {SUPPORTED_MODELS}")
        if self.config.duration > 0:
            self._status(f"Duration: {self.config.duration:g}s")
        else:
            self._status("Press Ctrl+C to stop")
        self._status("---")

        loop = asyncio.get_running_loop()
        try:
            await self.listener.start()

            deadline = None
            if self.config.duration > 0:
                deadline = loop.time() + self.config.duration

            while self._running:
                if deadline is not None and loop.time() >= deadline:
                    logger.debug("Scan duration elapsed")
                    break
                await asyncio.sleep(self.poll_interval)
        except asyncio.CancelledError:
            pass
        finally:
            self._running = False
            await self.listener.stop()
            for signum, handler in previous_handlers.items():
                signal.signal(signum, handler)

        self._status(
            f"---\nScan complete. Found {self.tracker.device_count} BroodMinder device(s)."
        )


def run_scanner(config: ScannerConfig):
    """Run the scanner service until done.

    Args:
        config: Scanner configuration.
    """
    service = ScanService(config)

    try:
        asyncio.run(service.run())
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except (BleakError, OSError) as e:
        logger.error(f"Failed to scan for BLE devices: {e}")
        logger.error(
            "On Linux, run with sudo or grant CAP_NET_ADMIN; "
            "on macOS, grant Bluetooth access to the terminal"
        )
        sys.exit(1)
