import io
import json
from datetime import datetime

import pytest
from rich.console import Console

from broodscan.decoder import parse_advertisement
from broodscan.scanner.render import ReadingRenderer

TS = datetime(2024, 5, 1, 12, 30, 5)
TEN_KG = 32767 + 1000


def _console():
    buf = io.StringIO()
    return Console(file=buf, width=400, highlight=False, soft_wrap=True), buf


@pytest.fixture
def th_reading(build_payload):
    payload = build_payload(42, fw_minor=10, fw_major=3, battery=68, sample=89,
                            temperature=24618, humidity=64)
    return parse_advertisement("a3:42:1b:90:03:00", -55, payload, timestamp=TS)


def test_text_fahrenheit(th_reading):
    line = ReadingRenderer().format_text(th_reading)

    assert line.startswith("[12:30:05] A3:42:1B:90:03:00 TH     FW:3.10  Bat: 68%  Sample:   89  Temp:")
    assert line.endswith("°F  Humidity: 64%")
    assert f"Temp:{th_reading.temperature_f:.1f}°F" in line


def test_text_celsius(th_reading):
    line = ReadingRenderer(celsius=True).format_text(th_reading)
    assert f"Temp:{th_reading.temperature_c:.2f}°C" in line


def test_text_four_cell_weight(build_payload):
    payload = build_payload(49, temperature=7000, weight_left=TEN_KG, weight_right=TEN_KG,
                            ext_left=TEN_KG, ext_right=TEN_KG)
    reading = parse_advertisement("C1:22:33:44:55:66", -60, payload, timestamp=TS)

    line = ReadingRenderer(celsius=True).format_text(reading)

    assert "Temp:20.00°C" in line
    assert "Wt: L=10.00 R=10.00 L2=10.00 R2=10.00 Total=40.00 kg" in line
    assert "Humidity" not in line


def test_text_realtime_and_swarm(build_payload):
    # realtime raw 0x1C20 = 7200 -> 22.00 C
    payload = build_payload(56, rt_temp_low=0x20, rt_temp_high=0x1C, humidity=50, tail_low=2)
    reading = parse_advertisement("D1:44:55:66:77:88", -65, payload, timestamp=TS)

    assert "RT:22.00°C" in ReadingRenderer(celsius=True).format_text(reading)
    line = ReadingRenderer().format_text(reading)
    assert "RT:71.6°F" in line
    assert line.endswith("Swarm:2")


def test_text_hides_zero_swarm_state(build_payload):
    reading = parse_advertisement("D1:44:55:66:77:88", -65, build_payload(47), timestamp=TS)
    assert "Swarm" not in ReadingRenderer().format_text(reading)


def test_json_record(th_reading):
    record = json.loads(ReadingRenderer(json_output=True).format_json(th_reading))

    assert record["mac"] == "A3:42:1B:90:03:00"
    assert record["model"] == "TH"
    assert record["humidity_pct"] == 64
    assert record["has_weight"] is False
    assert "weight_total" not in record
    assert record["timestamp"] == "2024-05-01T12:30:05"


def test_render_writes_one_line(th_reading):
    console, buf = _console()

    ReadingRenderer(json_output=True, console=console).render(th_reading)

    lines = buf.getvalue().splitlines()
    assert len(lines) == 1
    assert json.loads(lines[0])["sample_counter"] == 89


def test_render_text_keeps_brackets(th_reading):
    console, buf = _console()

    ReadingRenderer(console=console).render(th_reading)

    assert buf.getvalue().startswith("[12:30:05] A3:42:1B:90:03:00")
