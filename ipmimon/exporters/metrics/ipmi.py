"""IPMI sensor metrics exporter.

Runs ``ipmitool sdr`` against every configured BMC (or once against the local
BMC when no servers are configured) and emits one ``ipmi_sensor`` measurement
per numeric sensor row:

    ipmi_sensor,name=planar_vbat,unit=volts,server=192.168.1.1 value=3.05,status=1

The ``server`` tag is only present for remote BMCs.
"""

import asyncio
import logging
from typing import Awaitable, Callable, List, Optional, Sequence

from ...config import IpmiSensorConfig
from ...errors import AggregatedError
from ..runner import run_command
from ..utils import is_tool_available
from .base import MetricsExporter
from .connection import Connection, build_command
from .sdr import SensorReading, parse_output

MEASUREMENT = "ipmi_sensor"

Runner = Callable[..., Awaitable[bytes]]


def emit(accumulator, reading: SensorReading, server: Optional[str] = None) -> None:
    """Add one sensor reading to the accumulator as an ipmi_sensor measurement"""
    tags = {"name": reading.name}
    if reading.unit:
        tags["unit"] = reading.unit
    if server:
        tags["server"] = server

    fields = {
        "value": float(reading.value),
        "status": int(reading.status),
    }
    accumulator.add_fields(MEASUREMENT, fields, tags)


class IpmiSensorExporter(MetricsExporter):
    """
    Exports BMC sensor readings via ipmitool

    Args:
        config: IpmiSensorConfig or the raw ``ipmi_sensor`` config mapping
        runner: coroutine function ``runner(argv, timeout, server=None) -> bytes``
            used to execute ipmitool; defaults to run_command
    """

    def __init__(self, config=None, runner: Optional[Runner] = None,
                 logger: logging.Logger = logging.getLogger(__name__)):
        if not isinstance(config, IpmiSensorConfig):
            config = IpmiSensorConfig.from_dict(config)
        self.config = config
        self.runner = runner or run_command
        super().__init__(MEASUREMENT, logger)

    def is_available(self) -> bool:
        """Check if the configured ipmitool binary can be executed"""
        return is_tool_available(self.config.path)

    async def gather(self, accumulator) -> None:
        """
        Collect every configured target into the accumulator.

        All targets are attempted before anything is raised. A single target
        raises its own error; several targets raise AggregatedError listing
        the ones that failed.
        """
        targets: Sequence[Optional[str]] = self.config.servers or [None]

        if self.config.parallel and len(targets) > 1:
            results = await asyncio.gather(
                *(self._gather_target(accumulator, t) for t in targets),
                return_exceptions=True,
            )
        else:
            results = []
            for target in targets:
                try:
                    results.append(await self._gather_target(accumulator, target))
                except Exception as e:
                    results.append(e)

        errors: List[Exception] = []
        for result in results:
            if isinstance(result, asyncio.CancelledError):
                raise result
            if isinstance(result, Exception):
                errors.append(result)

        if not errors:
            return
        if len(targets) == 1:
            raise errors[0]
        raise AggregatedError(errors)

    async def _gather_target(self, accumulator, target: Optional[str]) -> int:
        server = None
        connection = None
        if target is not None:
            connection = Connection.parse(target)
            server = connection.host or None

        try:
            argv = build_command(self.config.path, connection, self.config.privilege)
            output = await self.runner(argv, self.config.timeout, server=server)
            readings = parse_output(output, self.config.skip_non_numeric, server=server)
        except Exception as e:
            self.logger.warning(f"ipmi_sensor collection failed for {server or 'local BMC'}: {e}")
            raise

        for reading in readings:
            emit(accumulator, reading, server)

        self.logger.debug(f"ipmi_sensor: {len(readings)} sensors from {server or 'local BMC'}")
        return len(readings)
