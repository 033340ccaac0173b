"""Six-way dynamic-programming aligner

Fills a (m+1) x (n+1) cost table between two sequences of lengths and
reconstructs the cheapest sequence of alignment operations.

Transitions into cell (i, j), in tie-break priority order:

    1-1 substitution   from (i-1, j-1)
    1-0 deletion       from (i-1, j)
    0-1 insertion      from (i, j-1)
    2-1 contraction    from (i-2, j-1)
    1-2 expansion      from (i-1, j-2)
    2-2 merger         from (i-2, j-2)

The table is an arena of numpy arrays: cumulative costs and the index of the
winning operation. A cell's predecessor is implied by its operation, so no
cell holds a reference to another.
"""

from typing import Iterator, List, Optional, Sequence, Tuple
import logging
import numpy as np

from ..models import OperationType
from .base import AlignableUnit, DPCell
from .cost import GaleChurchCostModel


OPERATIONS: Tuple[OperationType, ...] = tuple(OperationType)
NO_OPERATION = -1


class AlignmentTable:
    """A filled DP table for one alignment run"""

    def __init__(
        self,
        source: Sequence[AlignableUnit],
        target: Sequence[AlignableUnit],
        costs: np.ndarray,
        operations: np.ndarray,
    ):
        self.source = source
        self.target = target
        self.costs = costs
        self.operations = operations

    @property
    def shape(self) -> Tuple[int, int]:
        return self.costs.shape

    @property
    def total_cost(self) -> int:
        return int(self.costs[-1, -1])

    def cell(self, i: int, j: int) -> Optional[DPCell]:
        """Materialise cell (i, j); None for the origin"""
        op_index = int(self.operations[i, j])
        if op_index == NO_OPERATION:
            return None

        op = OPERATIONS[op_index]
        pi, pj = i - op.source_count, j - op.target_count
        return DPCell(
            operation=op,
            source_keys=tuple(unit.key for unit in self.source[pi:i]),
            target_keys=tuple(unit.key for unit in self.target[pj:j]),
            cost=int(self.costs[i, j]),
            index=(i, j),
            predecessor=(pi, pj),
            step_cost=int(self.costs[i, j] - self.costs[pi, pj]),
        )

    def backtrace(self) -> Iterator[DPCell]:
        """Yield the optimal path from the last cell back to the origin"""
        i, j = len(self.source), len(self.target)
        cell = self.cell(i, j)
        while cell is not None:
            yield cell
            i, j = cell.predecessor
            cell = self.cell(i, j)


class AlignmentEngine:
    """Minimum-cost alignment of two length sequences.

    Any object exposing ``cost(len1, len2, op) -> int`` can serve as the cost
    model; by default a Gale-Church model built from ``config`` is used.
    """

    def __init__(self, cost_model=None, **config):
        self.config = config
        self.cost_model = cost_model or GaleChurchCostModel(**config)
        self.logger = logging.getLogger(__name__)

    def fill(
        self, source: Sequence[AlignableUnit], target: Sequence[AlignableUnit]
    ) -> AlignmentTable:
        m, n = len(source), len(target)
        src_lengths = [unit.length for unit in source]
        tgt_lengths = [unit.length for unit in target]

        costs = np.zeros((m + 1, n + 1), dtype=np.int64)
        operations = np.full((m + 1, n + 1), NO_OPERATION, dtype=np.int8)
        cost_fn = self.cost_model.cost

        for i in range(m + 1):
            for j in range(n + 1):
                if i == 0 and j == 0:
                    continue

                best_cost = None
                best_op = NO_OPERATION
                for op_index, op in enumerate(OPERATIONS):
                    di, dj = op.value
                    if i < di or j < dj:
                        continue
                    candidate = int(costs[i - di, j - dj]) + cost_fn(
                        sum(src_lengths[i - di : i]),
                        sum(tgt_lengths[j - dj : j]),
                        op,
                    )
                    # Strict comparison: the earliest operation keeps a tie
                    if best_cost is None or candidate < best_cost:
                        best_cost = candidate
                        best_op = op_index

                costs[i, j] = best_cost
                operations[i, j] = best_op

        self.logger.debug(
            f"Filled {m + 1}x{n + 1} table, total cost {int(costs[m, n])}"
        )
        return AlignmentTable(source, target, costs, operations)

    def align(
        self, source: Sequence[AlignableUnit], target: Sequence[AlignableUnit]
    ) -> List[DPCell]:
        """Return the optimal backtrace, last operation first"""
        return list(self.fill(source, target).backtrace())
