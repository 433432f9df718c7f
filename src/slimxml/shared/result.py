"""Parse metrics collected while building a document tree."""

import time
from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class ParseMetrics:
    """Counters for one parse operation."""

    characters_processed: int = 0
    tags_read: int = 0
    nodes_created: int = 0
    values_read: int = 0
    max_depth: int = 0
    processing_time_ms: float = 0.0
    started_at: float = field(default_factory=time.time)

    @property
    def characters_per_second(self) -> float:
        """Calculate characters processed per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.characters_processed * 1000.0) / self.processing_time_ms

    def record_depth(self, depth: int) -> None:
        """Track the deepest nesting level seen so far."""
        if depth > self.max_depth:
            self.max_depth = depth

    def finish(self) -> None:
        """Stamp the elapsed time since the metrics were created."""
        self.processing_time_ms = (time.time() - self.started_at) * 1000

    def to_dict(self) -> Dict[str, Any]:
        return {
            "characters_processed": self.characters_processed,
            "tags_read": self.tags_read,
            "nodes_created": self.nodes_created,
            "values_read": self.values_read,
            "max_depth": self.max_depth,
            "processing_time_ms": self.processing_time_ms,
        }
