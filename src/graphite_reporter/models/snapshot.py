"""
Snapshot data models.

A Snapshot is the flattened set of measurements captured at the start of one
report cycle. It is built fresh for every cycle and dropped once the cycle's
batch has been sent (or has failed).
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Mapping, Tuple, Union

from ..validation import ResolutionError

Number = Union[int, float]


@dataclass(frozen=True)
class MetricSample:
    """
    One measurement at one point in time.

    Attributes:
        path: Dotted metric path, not yet namespace-prefixed
        value: Numeric value of the measurement
        timestamp: Seconds since epoch of the cycle that captured it
    """

    path: str
    value: Number
    timestamp: int

    def __post_init__(self):
        if not self.path:
            raise ValueError("metric path must be non-empty")


@dataclass
class Snapshot:
    """
    Ordered collection of samples owned by a single report cycle.

    Attributes:
        timestamp: Cycle start time in whole seconds since epoch
        samples: Samples in the order the collector produced them
        resolution_errors: Per-index failures recorded while collecting
    """

    timestamp: int
    samples: List[MetricSample] = field(default_factory=list)
    resolution_errors: List[ResolutionError] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, values: Mapping[str, Number], timestamp: int) -> "Snapshot":
        """Build a snapshot from an ordered path -> value mapping."""
        samples = [MetricSample(path, value, timestamp) for path, value in values.items()]
        return cls(timestamp=timestamp, samples=samples)

    def add(self, path: str, value: Number) -> None:
        self.samples.append(MetricSample(path, value, self.timestamp))

    def items(self) -> Iterator[Tuple[str, Number]]:
        """Iterate (path, value) pairs in snapshot order."""
        for sample in self.samples:
            yield sample.path, sample.value

    def as_dict(self) -> dict:
        return dict(self.items())

    def __len__(self) -> int:
        return len(self.samples)

    def __iter__(self) -> Iterator[MetricSample]:
        return iter(self.samples)
