"""In-memory corpus view, rebuilt on every update"""
import math
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Tuple


class SparseVector:
    """
    Fixed-size vector storing only its nonzero dimensions

    Absent dimensions read as 0.0.
    """

    def __init__(self, size: int):
        if size < 0:
            raise ValueError("size must be >= 0")
        self.size = size
        self._entries: Dict[int, float] = {}

    def __len__(self) -> int:
        return self.size

    def _check(self, index: int):
        if not 0 <= index < self.size:
            raise IndexError(f"dimension {index} out of range for size {self.size}")

    def __getitem__(self, index: int) -> float:
        self._check(index)
        return self._entries.get(index, 0.0)

    def __setitem__(self, index: int, value: float):
        self._check(index)
        if value:
            self._entries[index] = value
        else:
            self._entries.pop(index, None)

    def items(self) -> Iterator[Tuple[int, float]]:
        """Nonzero ``(dimension, weight)`` pairs in dimension order"""
        return iter(sorted(self._entries.items()))

    @property
    def nnz(self) -> int:
        return len(self._entries)

    def dot(self, other: "SparseVector") -> float:
        small, large = sorted((self._entries, other._entries), key=len)
        return math.fsum(weight * large[index] for index, weight in small.items() if index in large)

    def norm(self) -> float:
        """Euclidean (L2) norm"""
        return math.sqrt(math.fsum(weight * weight for weight in self._entries.values()))

    def to_dense(self) -> List[float]:
        dense = [0.0] * self.size
        for index, weight in self._entries.items():
            dense[index] = weight
        return dense

    def __repr__(self) -> str:
        return f"SparseVector(size={self.size}, entries={dict(self.items())})"


@dataclass
class Sibling:
    """Another document similar to the owner of the sibling list"""
    document_id: int
    similarity: float


@dataclass
class CorpusDocument:
    id: int
    title: str
    vector: SparseVector
    siblings: List[Sibling] = field(default_factory=list)
