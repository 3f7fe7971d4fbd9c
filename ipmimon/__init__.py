"""ipmimon - IPMI sensor telemetry collected through ipmitool"""

__version__ = "0.1.0"
