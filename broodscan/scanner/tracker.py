"""Duplicate suppression for retransmitted advertisements."""

import logging
import threading
from typing import Dict, Optional, Set

logger = logging.getLogger(__name__)


class ReadingTracker:
    """Remembers the last sample counter and discovery state per device.

    The BLE stack may deliver scan results from several threads, so every
    call holds the lock across its read and write.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._last_counter: Dict[str, int] = {}
        self._discovered: Set[str] = set()

    def admit(self, identity: str, counter: int) -> bool:
        """Return True if this (device, sample counter) has not just been seen.

        Only equality with the stored counter counts as a duplicate; a
        lower counter (wrap or device reset) is accepted and stored.
        """
        with self._lock:
            last = self._last_counter.get(identity)
            if last is not None and last == counter:
                logger.debug(f"Duplicate sample {counter} from {identity}")
                return False
            self._last_counter[identity] = counter
            return True

    def first_discovery(self, identity: str) -> bool:
        """Return True the first time a device is asked about, False after."""
        return self.discover(identity) is not None

    def discover(self, identity: str) -> Optional[int]:
        """Record a device and return its 1-based discovery number.

        Returns None if the device was already discovered. The number is
        read under the same lock as the insert.
        """
        with self._lock:
            if identity in self._discovered:
                return None
            self._discovered.add(identity)
            return len(self._discovered)

    @property
    def device_count(self) -> int:
        """Number of devices recorded as discovered."""
        with self._lock:
            return len(self._discovered)
