"""Metrics Collector Manager - Coordinates all metrics collection"""
import logging
from typing import Any, Dict, List, Optional

from ...accumulator import Accumulator
from .ipmi import IpmiSensorExporter


class MetricsCollectorManager:
    """Manages metrics collection from all enabled exporters"""

    # Registry mapping config keys to exporter classes
    EXPORTER_REGISTRY = {
        "ipmi_sensor": IpmiSensorExporter,
    }

    def __init__(self, config: Optional[Dict] = None):
        """
        Initialize metrics exporters based on configuration.

        Args:
            config: Configuration dictionary from ClientConfig; each exporter
                receives the section named after its registry key
        """
        self.config = config or {}
        self.logger = logging.getLogger("ipmimon.metrics_collector")

        exporter_config = self.config.get("exporters") or {}

        self.logger.info("Initializing metrics exporters from config...")
        self.exporters = []

        for exporter_key, exporter_class in self.EXPORTER_REGISTRY.items():
            if not exporter_config.get(exporter_key, True):
                self.logger.debug(f"Skipping disabled exporter: {exporter_key}")
                continue

            try:
                exporter = exporter_class(config=self.config.get(exporter_key))
            except Exception as e:
                self.logger.warning(f"Failed to initialize exporter {exporter_key}: {e}")
                continue

            if exporter.is_available():
                self.exporters.append(exporter)
                self.logger.info(f"Enabled exporter: {exporter_key}")
            else:
                self.logger.warning(f"Exporter {exporter_key} not available on this system")

        self.logger.info(f"Initialized {len(self.exporters)} metrics exporters")

    async def collect_metrics(self, accumulator: Optional[Accumulator] = None) -> List[Dict[str, Any]]:
        """
        Run one collection tick across all exporters.

        Failures are recorded on the accumulator and do not stop the
        remaining exporters.

        Returns:
            List of measurement dicts as written by the client
        """
        accumulator = accumulator if accumulator is not None else Accumulator()

        for exporter in self.exporters:
            await exporter.safe_gather(accumulator)

        return [m.to_dict() for m in accumulator.drain()]
