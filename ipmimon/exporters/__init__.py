"""
Exporters Module - IPMI sensor collection

Structure:
    exporters/
    - metrics/          # Metrics exporters
      - base.py         # MetricsExporter base class
      - connection.py   # BMC connection strings and ipmitool argv
      - sdr.py          # ipmitool sdr output parser
      - ipmi.py         # IPMI sensor exporter
      - manager.py      # Exporter registry and collection tick
    - runner.py         # Subprocess execution with timeout
    - utils.py          # Tool availability checks
"""

from .metrics import (
    Measurement,
    MetricsExporter,
    IpmiSensorExporter,
    MetricsCollectorManager,
)
from .runner import run_command
from .utils import is_tool_available

__all__ = [
    'Measurement',
    'MetricsExporter',
    'IpmiSensorExporter',
    'MetricsCollectorManager',
    'run_command',
    'is_tool_available',
]
