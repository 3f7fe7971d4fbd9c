"""Metrics exporters package - collects BMC sensor metrics"""

from .base import Measurement, MetricsExporter
from .connection import Connection, build_command, parse_connection
from .sdr import SensorReading, canonical_name, canonical_unit, parse_line, parse_output
from .ipmi import IpmiSensorExporter, emit
from .manager import MetricsCollectorManager

__all__ = [
    # Base classes
    'Measurement',
    'MetricsExporter',

    # Connection strings and argv
    'Connection',
    'build_command',
    'parse_connection',

    # sdr parsing
    'SensorReading',
    'canonical_name',
    'canonical_unit',
    'parse_line',
    'parse_output',

    # Exporters
    'IpmiSensorExporter',
    'emit',

    # Manager
    'MetricsCollectorManager',
]
