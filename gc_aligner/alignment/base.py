"""Alignment graph primitives

Defines the units fed to the DP, the cells it produces and the translation
of a finished cell into bipartite edges.
"""

from dataclasses import dataclass
from typing import Any, Dict, Hashable, List, Optional, Tuple

from ..models import OperationType, Side


@dataclass(frozen=True)
class AlignableUnit:
    """One element of a DP input sequence: an opaque key and a length"""

    key: Hashable
    length: int


@dataclass(frozen=True)
class DPCell:
    """A filled DP cell reached through its cheapest transition.

    ``cost`` is the cumulative cost from the table origin. ``predecessor`` is
    the (i, j) index of the cell this one was reached from, or None for the
    origin.
    """

    operation: OperationType
    source_keys: Tuple[Hashable, ...]
    target_keys: Tuple[Hashable, ...]
    cost: int
    index: Tuple[int, int]
    predecessor: Optional[Tuple[int, int]]
    step_cost: int = 0

    def __repr__(self):
        return (
            f"DPCell({self.operation.label}, src={self.source_keys}, "
            f"tgt={self.target_keys}, cost={self.cost})"
        )

    @property
    def x1(self) -> Optional[Hashable]:
        return self.source_keys[0] if self.source_keys else None

    @property
    def x2(self) -> Optional[Hashable]:
        return self.source_keys[1] if len(self.source_keys) > 1 else None

    @property
    def y1(self) -> Optional[Hashable]:
        return self.target_keys[0] if self.target_keys else None

    @property
    def y2(self) -> Optional[Hashable]:
        return self.target_keys[1] if len(self.target_keys) > 1 else None

    @property
    def is_one_to_one(self) -> bool:
        return self.operation is OperationType.SUBSTITUTION

    def edges(self) -> List[Tuple[Hashable, Hashable]]:
        """Source-target pairs this operation connects.

        Deletion and insertion connect nothing; every other operation
        connects each of its source keys to each of its target keys.
        """
        return [(x, y) for x in self.source_keys for y in self.target_keys]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "operation": self.operation.label,
            "source_keys": list(self.source_keys),
            "target_keys": list(self.target_keys),
            "cost": self.cost,
            "step_cost": self.step_cost,
        }


@dataclass(frozen=True)
class ParagraphRun:
    """Maximal run of consecutive units on one side sharing a paragraph id"""

    side: Side
    paragraph_id: int
    keys: Tuple[int, ...]
    length: int

    def __len__(self):
        return len(self.keys)


def paragraph_runs(store, side: Side) -> List[ParagraphRun]:
    """Snapshot the paragraph runs of one side of a text store"""
    runs: List[ParagraphRun] = []
    current_id = None
    keys: List[int] = []
    length = 0

    for key in store.ordered_keys(side):
        pid = store.paragraph_id(side, key)
        if keys and pid != current_id:
            runs.append(ParagraphRun(side, current_id, tuple(keys), length))
            keys, length = [], 0
        current_id = pid
        keys.append(key)
        length += store.length(side, key)

    if keys:
        runs.append(ParagraphRun(side, current_id, tuple(keys), length))
    return runs
