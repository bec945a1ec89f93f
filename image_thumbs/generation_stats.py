"""
GenerationStats - Per-variant results and totals for a thumbnail run.
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class Status(Enum):
    WRITTEN = 'written'
    SKIPPED = 'skipped'
    FAILED = 'failed'


@dataclass
class GenerationResult:
    """
    Outcome of one thumbnail variant.

    Attributes:
        spec_name: Name of the thumbnail spec
        key: Destination key (None if naming itself failed)
        status: WRITTEN, SKIPPED (already exists) or FAILED
        size_bytes: Encoded size for WRITTEN, 0 otherwise
        error: The exception for FAILED
    """
    spec_name: str
    key: Optional[str]
    status: Status
    size_bytes: int = 0
    error: Optional[Exception] = None

    @classmethod
    def written(cls, spec_name: str, key: str, size_bytes: int) -> 'GenerationResult':
        return cls(spec_name, key, Status.WRITTEN, size_bytes=size_bytes)

    @classmethod
    def skipped(cls, spec_name: str, key: str) -> 'GenerationResult':
        return cls(spec_name, key, Status.SKIPPED)

    @classmethod
    def failed(cls, spec_name: str, key: Optional[str], error: Exception) -> 'GenerationResult':
        return cls(spec_name, key, Status.FAILED, error=error)

    @property
    def ok(self) -> bool:
        return self.status is not Status.FAILED


@dataclass
class GenerationStats:
    """
    Statistics for a thumbnail run.

    Attributes:
        results: Per-variant results in configuration order
        images: Number of source images handled
        start_time: Start timestamp
    """
    results: List[GenerationResult] = field(default_factory=list)
    images: int = 0
    start_time: float = field(default_factory=time.time)

    def add(self, result: GenerationResult) -> None:
        self.results.append(result)

    def merge(self, other: 'GenerationStats') -> None:
        """Fold the results of another run into this one."""
        self.results.extend(other.results)
        self.images += other.images

    @property
    def written(self) -> int:
        return sum(1 for r in self.results if r.status is Status.WRITTEN)

    @property
    def skipped(self) -> int:
        return sum(1 for r in self.results if r.status is Status.SKIPPED)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if r.status is Status.FAILED)

    @property
    def bytes_generated(self) -> int:
        """Total bytes of thumbnails written."""
        return sum(r.size_bytes for r in self.results)

    @property
    def written_keys(self) -> List[str]:
        return [r.key for r in self.results if r.status is Status.WRITTEN]

    @property
    def first_error(self) -> Optional[Exception]:
        """Error of the first failed variant in configuration order."""
        for result in self.results:
            if result.status is Status.FAILED:
                return result.error
        return None

    @property
    def elapsed_seconds(self) -> float:
        """Elapsed time in seconds."""
        return time.time() - self.start_time

    def summary(self) -> str:
        return (
            f"{self.written} written, {self.skipped} skipped, {self.failed} failed "
            f"({self.bytes_generated:,} bytes, {self.elapsed_seconds:.2f}s)"
        )
