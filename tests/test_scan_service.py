import io
import json
import signal
import threading
from datetime import datetime

import pytest
from bleak.exc import BleakError
from rich.console import Console

from broodscan.scanner import listener as listener_module
from broodscan.scanner.config import ScannerConfig
from broodscan.scanner.render import ReadingRenderer
from broodscan.scanner.scan_service import ScanService, run_scanner

MAC = "aa:bb:cc:dd:ee:ff"


class FakeListener:
    """Stands in for the bleak listener and replays payloads on start."""

    def __init__(self, advertisements=()):
        self.advertisements = list(advertisements)
        self.service = None
        self.started = False
        self.stopped = False

    async def start(self):
        self.started = True
        for address, rssi, payload in self.advertisements:
            self.service.handle_advertisement(address, rssi, payload)

    async def stop(self):
        self.stopped = True


def make_service(config, listener=None):
    out = io.StringIO()
    err = io.StringIO()
    renderer = ReadingRenderer(
        celsius=config.celsius,
        json_output=config.json_output,
        console=Console(file=out, width=400, highlight=False, soft_wrap=True),
    )
    service = ScanService(
        config,
        renderer=renderer,
        listener=listener or FakeListener(),
        status_console=Console(file=err, width=400, highlight=False),
    )
    if isinstance(service.listener, FakeListener):
        service.listener.service = service
    return service, out, err


def test_duplicate_sample_dropped(build_payload):
    service, out, _ = make_service(ScannerConfig())
    payload = build_payload(42, sample=7)

    assert service.handle_advertisement(MAC, -50, payload) is not None
    assert service.handle_advertisement(MAC, -50, payload) is None
    assert service.handle_advertisement(MAC, -50, build_payload(42, sample=8)) is not None

    assert len(out.getvalue().splitlines()) == 2


def test_show_all_disables_dedup(build_payload):
    service, out, _ = make_service(ScannerConfig(show_all=True))
    payload = build_payload(42, sample=7)

    service.handle_advertisement(MAC, -50, payload)
    service.handle_advertisement(MAC, -50, payload)

    assert len(out.getvalue().splitlines()) == 2
    assert service.tracker.device_count == 1


def test_short_payload_logged_and_dropped(caplog):
    service, out, _ = make_service(ScannerConfig())

    with caplog.at_level("WARNING"):
        assert service.handle_advertisement(MAC, -50, b"\x2a\x01\x02") is None

    assert "payload too short" in caplog.text
    assert out.getvalue() == ""


def test_discovery_announced_once(build_payload):
    service, _, err = make_service(ScannerConfig())

    service.handle_advertisement(MAC, -50, build_payload(57, sample=1))
    service.handle_advertisement(MAC, -50, build_payload(57, sample=2))

    status = err.getvalue()
    assert status.count("Discovered BroodMinder device") == 1
    assert "#1: AA:BB:CC:DD:EE:FF (W+)" in status


def test_json_mode_keeps_status_quiet(build_payload):
    service, out, err = make_service(ScannerConfig(json_output=True))

    service.handle_advertisement(MAC, -50, build_payload(56, sample=3, humidity=64))

    assert err.getvalue() == ""
    assert json.loads(out.getvalue())["humidity_pct"] == 64


@pytest.mark.asyncio
async def test_run_stops_after_duration(build_payload):
    listener = FakeListener([
        (MAC, -50, build_payload(42, sample=1)),
        (MAC, -50, build_payload(42, sample=1)),
        ("11:22:33:44:55:66", -60, build_payload(57, sample=1)),
    ])
    service, out, err = make_service(ScannerConfig(duration=0.05), listener)
    service.poll_interval = 0.01

    started = datetime.now()
    await service.run()

    assert (datetime.now() - started).total_seconds() < 5
    assert listener.started and listener.stopped
    assert len(out.getvalue().splitlines()) == 2
    assert "Scan complete. Found 2 BroodMinder device(s)." in err.getvalue()


@pytest.mark.asyncio
async def test_stop_ends_continuous_scan():
    class StoppingListener(FakeListener):
        async def start(self):
            self.started = True
            self.service.stop()

    listener = StoppingListener()
    service, _, err = make_service(ScannerConfig(), listener)

    await service.run()

    assert listener.stopped
    assert "Press Ctrl+C to stop" in err.getvalue()


def test_concurrent_new_devices_announced_with_distinct_numbers(build_payload):
    service, _, err = make_service(ScannerConfig())
    barrier = threading.Barrier(8)

    def deliver(index):
        barrier.wait()
        service.handle_advertisement(f"00:00:00:00:00:{index:02X}", -50, build_payload(42))

    threads = [threading.Thread(target=deliver, args=(i,)) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    numbers = sorted(
        int(line.split("#")[1].split(":")[0])
        for line in err.getvalue().splitlines()
        if line.startswith("Discovered")
    )
    assert numbers == list(range(1, 9))


class FailingBleakScanner:
    def __init__(self, detection_callback=None, **kwargs):
        pass

    async def start(self):
        raise BleakError("No Bluetooth adapters found.")

    async def stop(self):
        pass


def test_run_scanner_exits_when_adapter_fails(monkeypatch, caplog):
    monkeypatch.setattr(listener_module, "BleakScanner", FailingBleakScanner)
    previous = signal.getsignal(signal.SIGINT)

    with caplog.at_level("ERROR"), pytest.raises(SystemExit) as exc_info:
        run_scanner(ScannerConfig(json_output=True))

    assert exc_info.value.code == 1
    assert "No Bluetooth adapters found." in caplog.text
    assert signal.getsignal(signal.SIGINT) is previous


def test_run_scanner_exits_on_os_error(monkeypatch):
    class NoPermissionScanner(FailingBleakScanner):
        async def start(self):
            raise PermissionError("Operation not permitted")

    monkeypatch.setattr(listener_module, "BleakScanner", NoPermissionScanner)

    with pytest.raises(SystemExit) as exc_info:
        run_scanner(ScannerConfig(json_output=True))

    assert exc_info.value.code == 1
