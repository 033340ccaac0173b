"""Paragraph correction

Before sentences are aligned, paragraph boundaries of the two texts are
reconciled. Each side is projected to one unit per paragraph (its summed
length), the projections are aligned once over the whole document, and the
backtrace decides which paragraphs are merged, dropped from the source
(deleted) or extra in the target (inserted).

The backtrace is walked from the document end with one backward cursor per
side over immutable snapshots of the paragraph runs. Merges are collected
into a key -> paragraph id map and written to the store after the walk, so
the snapshot never changes while it is being read.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set
import logging
import time

from ..models import AlignmentStage, OperationType, Side
from .base import AlignableUnit, DPCell, ParagraphRun, paragraph_runs
from .engine import AlignmentEngine


@dataclass
class ParagraphCorrection:
    """Outcome of one paragraph correction pass"""

    operations: List[DPCell] = field(default_factory=list)
    source_renumbering: Dict[int, int] = field(default_factory=dict)
    target_renumbering: Dict[int, int] = field(default_factory=dict)
    deleted_paragraphs: Set[int] = field(default_factory=set)
    inserted_paragraphs: Set[int] = field(default_factory=set)
    source_paragraphs: int = 0
    target_paragraphs: int = 0
    total_cost: int = 0
    elapsed_seconds: float = 0.0

    @property
    def renumbered_units(self) -> int:
        return len(self.source_renumbering) + len(self.target_renumbering)

    def operation_counts(self) -> Dict[str, int]:
        counts = {op.label: 0 for op in OperationType}
        for cell in self.operations:
            counts[cell.operation.label] += 1
        return counts

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source_paragraphs": self.source_paragraphs,
            "target_paragraphs": self.target_paragraphs,
            "operations": self.operation_counts(),
            "deleted_paragraphs": sorted(self.deleted_paragraphs),
            "inserted_paragraphs": sorted(self.inserted_paragraphs),
            "renumbered_units": {
                "source": len(self.source_renumbering),
                "target": len(self.target_renumbering),
            },
            "total_cost": self.total_cost,
            "elapsed_seconds": round(self.elapsed_seconds, 4),
        }


class _RunCursor:
    """Backward cursor over one side's paragraph runs"""

    def __init__(self, runs: List[ParagraphRun]):
        self.runs = runs
        self.position = len(runs)

    def take(self, count: int) -> List[ParagraphRun]:
        """Consume up to ``count`` runs before the cursor, in document order.

        At the start of the sequence the cursor stays put and nothing more
        is consumed.
        """
        start = max(0, self.position - count)
        taken = self.runs[start : self.position]
        self.position = start
        return taken


class ParagraphCorrector:
    """Align paragraph projections and rewrite paragraph ids in the store"""

    def __init__(self, store, engine: AlignmentEngine = None, **config):
        self.store = store
        self.config = config
        self.engine = engine or AlignmentEngine(**config)
        self.logger = logging.getLogger(__name__)

    @staticmethod
    def project(runs: List[ParagraphRun]) -> List[AlignableUnit]:
        """One unit per paragraph run, keyed by paragraph id"""
        return [AlignableUnit(run.paragraph_id, run.length) for run in runs]

    def run(self) -> Optional[ParagraphCorrection]:
        """Correct paragraph boundaries once per document.

        Returns None without touching the store unless the document is still
        NOT_ALIGNED.
        """
        state = self.store.alignment_state
        if state.stage is not AlignmentStage.NOT_ALIGNED:
            self.logger.debug(
                f"Paragraph correction skipped: document is {state.stage.value}"
            )
            return None

        start_time = time.time()

        source_runs = paragraph_runs(self.store, Side.SOURCE)
        target_runs = paragraph_runs(self.store, Side.TARGET)
        self.logger.info(
            f"Paragraph correction: {len(source_runs)} source paragraphs, "
            f"{len(target_runs)} target paragraphs"
        )

        table = self.engine.fill(self.project(source_runs), self.project(target_runs))
        result = ParagraphCorrection(
            source_paragraphs=len(source_runs),
            target_paragraphs=len(target_runs),
            total_cost=table.total_cost,
        )

        source_cursor = _RunCursor(source_runs)
        target_cursor = _RunCursor(target_runs)
        for cell in table.backtrace():
            src = source_cursor.take(cell.operation.source_count)
            tgt = target_cursor.take(cell.operation.target_count)
            result.operations.append(cell)

            if cell.operation is OperationType.DELETION:
                result.deleted_paragraphs.update(run.paragraph_id for run in src)
            elif cell.operation is OperationType.INSERTION:
                result.inserted_paragraphs.update(run.paragraph_id for run in tgt)

            self._merge(src, result.source_renumbering)
            self._merge(tgt, result.target_renumbering)

        self._apply(Side.SOURCE, result.source_renumbering)
        self._apply(Side.TARGET, result.target_renumbering)

        state.deleted_paragraphs.update(result.deleted_paragraphs)
        state.inserted_paragraphs.update(result.inserted_paragraphs)
        state.paragraph_correction = result
        state.stage = AlignmentStage.PARAGRAPHS_CORRECTED

        result.elapsed_seconds = time.time() - start_time
        counts = result.operation_counts()
        self.logger.info(
            f"  Operations: {', '.join(f'{k}x{v}' for k, v in counts.items() if v)}"
            if result.operations
            else "  Operations: none"
        )
        self.logger.info(
            f"  Deleted: {sorted(result.deleted_paragraphs)}, "
            f"inserted: {sorted(result.inserted_paragraphs)}, "
            f"renumbered units: {result.renumbered_units}"
        )
        return result

    @staticmethod
    def _merge(runs: List[ParagraphRun], renumbering: Dict[int, int]):
        # The later of two runs joins the earlier one
        if len(runs) < 2:
            return
        earlier, later = runs
        for key in later.keys:
            renumbering[key] = earlier.paragraph_id

    def _apply(self, side: Side, renumbering: Dict[int, int]):
        for key, paragraph_id in renumbering.items():
            self.store.set_paragraph_id(side, key, paragraph_id)
        if renumbering:
            self.logger.debug(f"Renumbered {len(renumbering)} {side.value} units")
