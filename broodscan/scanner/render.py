"""Text and JSON line rendering of readings."""

import json
from typing import Optional

from rich.console import Console

from broodscan.shared.models import Reading


class ReadingRenderer:
    """Writes one line per reading to the console."""

    def __init__(
        self,
        celsius: bool = False,
        json_output: bool = False,
        console: Optional[Console] = None,
    ):
        self.celsius = celsius
        self.json_output = json_output
        self.console = console or Console(highlight=False, soft_wrap=True)

    def format_text(self, reading: Reading) -> str:
        """Single-line human readable summary."""
        if self.celsius:
            temp = f"{reading.temperature_c:.2f}°C"
        else:
            temp = f"{reading.temperature_f:.1f}°F"

        ts = reading.timestamp.strftime("%H:%M:%S")
        line = (
            f"[{ts}] {reading.address} {reading.model_name:<6} FW:{reading.firmware}  "
            f"Bat:{reading.battery_percent:3d}%  Sample:{reading.sample_counter:5d}  Temp:{temp}"
        )

        if reading.has_humidity:
            line += f"  Humidity:{reading.humidity_percent:3d}%"

        if reading.has_weight:
            line += f"  Wt: L={reading.weight_left:.2f} R={reading.weight_right:.2f}"
            if reading.has_four_cell:
                line += f" L2={reading.weight_left_2:.2f} R2={reading.weight_right_2:.2f}"
            line += f" Total={reading.weight_total:.2f} kg"

        if reading.has_realtime and reading.realtime_temperature_c != 0:
            if self.celsius:
                line += f"  RT:{reading.realtime_temperature_c:.2f}°C"
            else:
                line += f"  RT:{reading.realtime_temperature_f:.1f}°F"

        if reading.has_swarm and reading.swarm_state > 0:
            line += f"  Swarm:{reading.swarm_state}"

        return line

    def format_json(self, reading: Reading) -> str:
        return json.dumps(reading.to_dict(), ensure_ascii=False)

    def render(self, reading: Reading):
        """Print the reading in the configured format."""
        if self.json_output:
            line = self.format_json(reading)
        else:
            line = self.format_text(reading)
        self.console.print(line, markup=False, highlight=False)
