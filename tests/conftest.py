import struct

import pytest

NO_WEIGHT = 0x7FFF


def make_payload(
    model,
    fw_minor=1,
    fw_major=1,
    rt_temp_low=0,
    battery=50,
    sample=1,
    temperature=5000,
    rt_temp_high=0,
    weight_left=NO_WEIGHT,
    weight_right=NO_WEIGHT,
    humidity=0,
    ext_left=NO_WEIGHT,
    ext_right=NO_WEIGHT,
    tail_low=0,
    tail_high=0,
):
    """Build a 21-byte BroodMinder manufacturer payload."""
    return struct.pack(
        "<BBBBBHHBHHBHHBB",
        model,
        fw_minor,
        fw_major,
        rt_temp_low,
        battery,
        sample,
        temperature,
        rt_temp_high,
        weight_left,
        weight_right,
        humidity,
        ext_left,
        ext_right,
        tail_low,
        tail_high,
    )


@pytest.fixture
def build_payload():
    return make_payload
