import argparse
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5.0

_DURATION_RE = re.compile(r"^\s*(\d+(?:\.\d+)?|\.\d+)\s*(ms|s|m|h)?\s*$")
_DURATION_UNITS = {"ms": 0.001, "s": 1.0, "m": 60.0, "h": 3600.0}


def parse_duration(value: Union[int, float, str]) -> float:
    """Convert 5, 2.5, "5s", "500ms" or "1m" into seconds"""
    if isinstance(value, bool):
        raise ConfigError(f"invalid duration: {value!r}")
    if isinstance(value, (int, float)):
        seconds = float(value)
    else:
        match = _DURATION_RE.match(str(value))
        if not match:
            raise ConfigError(f"invalid duration: {value!r}")
        seconds = float(match.group(1)) * _DURATION_UNITS[match.group(2) or "s"]
    if seconds <= 0:
        raise ConfigError(f"duration must be positive: {value!r}")
    return seconds


@dataclass
class IpmiSensorConfig:
    """Settings of the ipmi_sensor exporter"""
    path: str = "ipmitool"
    servers: List[str] = field(default_factory=list)
    timeout: float = DEFAULT_TIMEOUT
    privilege: Optional[str] = None
    skip_non_numeric: bool = True
    parallel: bool = False

    def __post_init__(self):
        if not self.path:
            raise ConfigError("ipmi_sensor path must not be empty")
        if self.servers is None:
            self.servers = []
        if isinstance(self.servers, str):
            self.servers = [self.servers]
        self.servers = [str(s) for s in self.servers]
        self.timeout = parse_duration(self.timeout)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "IpmiSensorConfig":
        data = dict(data or {})
        unknown = set(data) - set(cls.__dataclass_fields__)
        if unknown:
            raise ConfigError(f"unknown ipmi_sensor settings: {', '.join(sorted(unknown))}")
        return cls(**data)


@dataclass
class ClientConfig:
    """Client configuration with defaults"""
    interval: int = 10
    log_level: str = "INFO"
    once: bool = False
    exporters: Dict[str, Any] = None
    ipmi_sensor: Dict[str, Any] = None

    def __post_init__(self):
        # Metrics exporters configuration (enable/disable)
        if self.exporters is None:
            self.exporters = {
                "ipmi_sensor": True,
            }

        if self.ipmi_sensor is None:
            self.ipmi_sensor = {
                "path": "ipmitool",
                "servers": [],
                "timeout": DEFAULT_TIMEOUT,
            }

    @classmethod
    def from_file(cls, config_path: Path) -> "ClientConfig":
        """Load configuration from YAML file"""
        if not config_path.exists():
            logger.debug(f"Config file not found: {config_path}, using defaults")
            return cls()

        try:
            with open(config_path, "r") as f:
                data = yaml.safe_load(f) or {}
            logger.debug(f"Loaded config from {config_path}")
            return cls(**data)
        except (OSError, TypeError, yaml.YAMLError) as e:
            logger.warning(f"Failed to load config from {config_path}: {e}, using defaults")
            return cls()

    def override_with_args(self, args: argparse.Namespace) -> "ClientConfig":
        """Override config with command line arguments if provided"""
        self.interval = args.interval if args.interval is not None else self.interval
        self.log_level = args.log_level if args.log_level is not None else self.log_level
        self.once = args.once or self.once
        return self
