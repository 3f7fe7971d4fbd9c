"""Pytest configuration and shared fixtures"""
from pathlib import Path

import pytest

from ipmimon.accumulator import Accumulator

FIXTURES = Path(__file__).parent / "fixtures"

# Reference `ipmitool sdr` dump: 133 rows, 13 of them with numeric readings
SDR_REFERENCE = (FIXTURES / "sdr_reference.txt").read_bytes()
SDR_REFERENCE_ROWS = 133
SDR_REFERENCE_NUMERIC_ROWS = 13

REMOTE_SERVER = "USERID:PASSW0RD@lan(192.168.1.1)"

# Measurements every collection of the reference dump must contain
EXPECTED_SENSORS = [
    ({"name": "ambient_temp", "unit": "degrees_c"}, {"value": 20.0, "status": 1}),
    ({"name": "altitude", "unit": "feet"}, {"value": 80.0, "status": 1}),
    ({"name": "avg_power", "unit": "watts"}, {"value": 210.0, "status": 1}),
    ({"name": "planar_5v", "unit": "volts"}, {"value": 4.9, "status": 1}),
    ({"name": "planar_vbat", "unit": "volts"}, {"value": 3.05, "status": 1}),
    ({"name": "fan_1a_tach", "unit": "rpm"}, {"value": 2610.0, "status": 1}),
    ({"name": "fan_1b_tach", "unit": "rpm"}, {"value": 1775.0, "status": 1}),
]


class FakeRunner:
    """Stands in for run_command: records every argv and answers from a script"""

    def __init__(self, responses=None, default=SDR_REFERENCE):
        self.responses = responses or {}
        self.default = default
        self.calls = []

    async def __call__(self, argv, timeout, server=None):
        self.calls.append((list(argv), timeout, server))
        response = self.responses.get(server, self.default)
        if isinstance(response, BaseException):
            raise response
        return response


def find_measurement(accumulator, name, tags):
    """Return the first measurement with exactly these tags"""
    for measurement in accumulator.measurements:
        if measurement.name == name and measurement.tags == tags:
            return measurement
    return None


@pytest.fixture
def accumulator():
    return Accumulator()


@pytest.fixture
def sdr_reference():
    return SDR_REFERENCE


@pytest.fixture
def fake_runner():
    return FakeRunner()
