"""Accumulator - the sink that receives measurements and errors during a tick"""
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class Measurement:
    """Single measurement: a name, a tag set and a field set"""
    name: str
    fields: Dict[str, Any]
    tags: Dict[str, str] = field(default_factory=dict)
    timestamp: int = None

    def __post_init__(self):
        if self.timestamp is None:
            self.timestamp = int(time.time())

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form written by the client"""
        return {
            "timestamp": self.timestamp,
            "measurement": self.name,
            "tags": dict(self.tags),
            "fields": dict(self.fields),
        }


class Accumulator:
    """
    Collects measurements and errors from exporters.

    Safe to share between concurrently running gathers: every mutation goes
    through a lock. Nothing is deduplicated.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self.measurements: List[Measurement] = []
        self.errors: List[Exception] = []

    def add_fields(self, name: str, fields: Dict[str, Any], tags: Optional[Dict[str, str]] = None,
                   timestamp: Optional[int] = None) -> Measurement:
        """Record one measurement"""
        measurement = Measurement(name, dict(fields), dict(tags or {}), timestamp)
        with self._lock:
            self.measurements.append(measurement)
        return measurement

    def add_error(self, error: Exception) -> None:
        """Report a collection failure"""
        with self._lock:
            self.errors.append(error)

    def field_count(self) -> int:
        """Total number of fields across all measurements"""
        with self._lock:
            return sum(len(m.fields) for m in self.measurements)

    def drain(self) -> List[Measurement]:
        """Return and clear the collected measurements"""
        with self._lock:
            measurements, self.measurements = self.measurements, []
        return measurements

    def __len__(self) -> int:
        with self._lock:
            return len(self.measurements)
