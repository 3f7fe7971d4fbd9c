import logging
import time
from abc import ABC, abstractmethod

from ...accumulator import Accumulator, Measurement

logger = logging.getLogger(__name__)

__all__ = ["Measurement", "MetricsExporter"]


class MetricsExporter(ABC):
    """Base class for all metrics exporters"""

    def __init__(self, name: str, logger: logging.Logger = logger):
        self.name = name
        self.enabled = True
        self.last_collection = 0
        self.logger = logger

    def is_available(self) -> bool:
        """Check if this exporter is available. Override in subclasses for specific checks."""
        return True

    @abstractmethod
    async def gather(self, accumulator: Accumulator) -> None:
        """Collect measurements into the accumulator, raising on failure"""

    async def safe_gather(self, accumulator: Accumulator) -> None:
        """Gather and report any failure to the accumulator error channel instead of raising"""
        if not self.enabled:
            return

        start_time = time.time()
        before = len(accumulator)
        try:
            await self.gather(accumulator)
        except Exception as e:
            self.logger.error(f"{self.name} collection failed: {e}")
            accumulator.add_error(e)
        finally:
            collection_time = time.time() - start_time
            self.logger.debug(
                f"{self.name}: collected {len(accumulator) - before} measurements in {collection_time:.2f}s")
            self.last_collection = time.time()
