"""Unit tests for the metrics collector manager and the client loop"""
import asyncio
import io
import json
import logging
from unittest.mock import patch

from conftest import REMOTE_SERVER, SDR_REFERENCE_NUMERIC_ROWS, FakeRunner
from ipmimon.accumulator import Accumulator
from ipmimon.client import metrics_loop, write_batch
from ipmimon.config import ClientConfig
from ipmimon.errors import ToolError
from ipmimon.exporters.metrics.ipmi import IpmiSensorExporter
from ipmimon.exporters.metrics.manager import MetricsCollectorManager

_AVAILABLE = "ipmimon.exporters.metrics.ipmi.is_tool_available"


def make_manager(config, runner):
    with patch(_AVAILABLE, return_value=True):
        manager = MetricsCollectorManager(config=config)
    for exporter in manager.exporters:
        exporter.runner = runner
    return manager


class TestMetricsCollectorManager:
    """Test MetricsCollectorManager"""

    def test_enabled_exporter(self):
        manager = make_manager(ClientConfig().__dict__, FakeRunner())

        assert len(manager.exporters) == 1
        assert isinstance(manager.exporters[0], IpmiSensorExporter)

    def test_disabled_exporter(self):
        manager = make_manager({"exporters": {"ipmi_sensor": False}}, FakeRunner())

        assert manager.exporters == []

    def test_unavailable_exporter_skipped(self):
        with patch(_AVAILABLE, return_value=False):
            manager = MetricsCollectorManager(config=ClientConfig().__dict__)

        assert manager.exporters == []

    def test_invalid_exporter_config_skipped(self):
        manager = make_manager({"ipmi_sensor": {"timeout": -1}}, FakeRunner())

        assert manager.exporters == []

    def test_collect_metrics(self):
        config = ClientConfig(ipmi_sensor={"servers": [REMOTE_SERVER]}).__dict__
        manager = make_manager(config, FakeRunner())

        batch = asyncio.run(manager.collect_metrics())

        assert len(batch) == SDR_REFERENCE_NUMERIC_ROWS
        assert batch[0]["measurement"] == "ipmi_sensor"
        assert batch[0]["tags"] == {"name": "ambient_temp", "unit": "degrees_c", "server": "192.168.1.1"}
        assert batch[0]["fields"] == {"value": 20.0, "status": 1}
        assert isinstance(batch[0]["timestamp"], int)

    def test_collect_metrics_records_errors(self):
        config = ClientConfig(ipmi_sensor={"servers": [REMOTE_SERVER]}).__dict__
        manager = make_manager(config, FakeRunner(default=ToolError(["ipmitool"], 1)))
        accumulator = Accumulator()

        batch = asyncio.run(manager.collect_metrics(accumulator))

        assert batch == []
        assert len(accumulator.errors) == 1


class TestClientLoop:
    """Test the client output loop"""

    def test_write_batch(self):
        out = io.StringIO()

        write_batch([{"measurement": "ipmi_sensor", "tags": {}, "fields": {"value": 1.0}}], out)

        assert json.loads(out.getvalue()) == {"measurement": "ipmi_sensor", "tags": {}, "fields": {"value": 1.0}}

    def test_metrics_loop_once(self):
        config = ClientConfig(once=True)
        manager = make_manager(config.__dict__, FakeRunner())
        out = io.StringIO()

        asyncio.run(metrics_loop(config, manager, out))

        lines = out.getvalue().splitlines()
        assert len(lines) == SDR_REFERENCE_NUMERIC_ROWS
        assert all("server" not in json.loads(line)["tags"] for line in lines)

    def test_failed_target_logged_once_per_level(self, caplog):
        config = ClientConfig(once=True, ipmi_sensor={"servers": [REMOTE_SERVER]})
        manager = make_manager(config.__dict__, FakeRunner(default=ToolError(["ipmitool"], 1)))
        caplog.set_level(logging.DEBUG)

        asyncio.run(metrics_loop(config, manager, io.StringIO()))

        failures = [r for r in caplog.records if "ipmitool exited with status 1" in r.getMessage()]
        assert [r.levelno for r in failures] == [logging.WARNING, logging.ERROR]
