"""Discrete transition distributions over successor states."""

from typing import Hashable, Iterator, List, Sequence, Tuple

import numpy as np

State = Hashable


class Categorical:
    """
    Dense categorical distribution.

    Keeps the full support, including zero-probability entries, so
    items() enumerates every (value, probability) pair.
    """

    def __init__(self, values: Sequence[State], probs: Sequence[float]):
        if len(values) != len(probs):
            raise ValueError(
                f"Shape mismatch: {len(values)} values but {len(probs)} probabilities"
            )
        self.values = list(values)
        self.probs = np.asarray(probs, dtype=float)
        self._index = None

    def support(self) -> List[State]:
        return list(self.values)

    def items(self) -> Iterator[Tuple[State, float]]:
        """Yield every (value, probability) pair, zeros included."""
        for v, p in zip(self.values, self.probs):
            yield v, float(p)

    def nonzero_items(self) -> Iterator[Tuple[State, float]]:
        """Yield only pairs with nonzero probability."""
        for i in np.flatnonzero(self.probs):
            yield self.values[i], float(self.probs[i])

    def pdf(self, value: State) -> float:
        if self._index is None:
            self._index = {v: i for i, v in enumerate(self.values)}
        i = self._index.get(value)
        if i is None:
            return 0.0
        return float(self.probs[i])

    def __iter__(self):
        return self.items()

    def __len__(self) -> int:
        return len(self.values)

    def __repr__(self) -> str:
        return f"Categorical({dict(self.items())!r})"


class SparseCategorical(Categorical):
    """
    Compact categorical distribution.

    Zero-probability entries are dropped at construction, so items() and
    nonzero_items() enumerate the same pairs.
    """

    def __init__(self, values: Sequence[State], probs: Sequence[float]):
        if len(values) != len(probs):
            raise ValueError(
                f"Shape mismatch: {len(values)} values but {len(probs)} probabilities"
            )
        kept = [(v, float(p)) for v, p in zip(values, probs) if p != 0.0]
        super().__init__([v for v, _ in kept], [p for _, p in kept])

    @classmethod
    def from_dict(cls, dist: dict) -> "SparseCategorical":
        """Build from a {value -> probability} mapping."""
        return cls(list(dist.keys()), list(dist.values()))

    def nonzero_items(self) -> Iterator[Tuple[State, float]]:
        return self.items()

    def __repr__(self) -> str:
        return f"SparseCategorical({dict(self.items())!r})"


class Deterministic(SparseCategorical):
    """Point mass on a single successor."""

    def __init__(self, value: State):
        super().__init__([value], [1.0])

    def __repr__(self) -> str:
        return f"Deterministic({self.values[0]!r})"
