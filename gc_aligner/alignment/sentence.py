"""Sentence alignment

Walks the (corrected) paragraph runs of both sides in lock-step, aligns the
sentences of each matched pair of paragraphs with the DP engine and commits
the resulting edges to the text store.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple
import logging
import time

from ..models import AlignmentStage, OperationType, Side
from .base import AlignableUnit, DPCell, ParagraphRun, paragraph_runs
from .engine import AlignmentEngine


@dataclass
class BlockAlignment:
    """Sentence alignment of one matched source/target paragraph pair"""

    source_paragraph: int
    target_paragraph: int
    cells: List[DPCell]
    total_cost: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source_paragraph": self.source_paragraph,
            "target_paragraph": self.target_paragraph,
            "total_cost": self.total_cost,
            "operations": [cell.to_dict() for cell in reversed(self.cells)],
        }


@dataclass
class SentenceAlignmentResult:
    """Outcome of one sentence alignment pass"""

    blocks: List[BlockAlignment] = field(default_factory=list)
    edges: List[Tuple[int, int]] = field(default_factory=list)
    skipped_source_paragraphs: List[int] = field(default_factory=list)
    skipped_target_paragraphs: List[int] = field(default_factory=list)
    unmatched_source_paragraphs: List[int] = field(default_factory=list)
    unmatched_target_paragraphs: List[int] = field(default_factory=list)
    elapsed_seconds: float = 0.0

    @property
    def cells(self) -> List[DPCell]:
        """All operations in document order"""
        return [cell for block in self.blocks for cell in reversed(block.cells)]

    def operation_counts(self) -> Dict[str, int]:
        counts = {op.label: 0 for op in OperationType}
        for block in self.blocks:
            for cell in block.cells:
                counts[cell.operation.label] += 1
        return counts

    def to_dict(self) -> Dict[str, Any]:
        return {
            "blocks": len(self.blocks),
            "edges": len(self.edges),
            "operations": self.operation_counts(),
            "skipped_source_paragraphs": self.skipped_source_paragraphs,
            "skipped_target_paragraphs": self.skipped_target_paragraphs,
            "unmatched_source_paragraphs": self.unmatched_source_paragraphs,
            "unmatched_target_paragraphs": self.unmatched_target_paragraphs,
            "elapsed_seconds": round(self.elapsed_seconds, 4),
        }


class SentenceAligner:
    """Per-paragraph sentence alignment driver.

    Source paragraphs marked deleted and target paragraphs marked inserted
    are skipped rather than paired. Those ids come from the store's
    alignment state (filled by paragraph correction) plus the optional
    ``deleted`` and ``inserted`` arguments.
    """

    def __init__(
        self,
        store,
        engine: AlignmentEngine = None,
        deleted: Optional[Iterable[int]] = None,
        inserted: Optional[Iterable[int]] = None,
        **config,
    ):
        self.store = store
        self.config = config
        self.engine = engine or AlignmentEngine(**config)
        self.deleted: Set[int] = set(deleted or ())
        self.inserted: Set[int] = set(inserted or ())
        self.logger = logging.getLogger(__name__)

    def _units(self, side: Side, run: ParagraphRun) -> List[AlignableUnit]:
        return [AlignableUnit(key, self.store.length(side, key)) for key in run.keys]

    @staticmethod
    def _next_run(
        runs: List[ParagraphRun], position: int, skip: Set[int], skipped: List[int]
    ) -> int:
        while position < len(runs) and runs[position].paragraph_id in skip:
            skipped.append(runs[position].paragraph_id)
            position += 1
        return position

    def run(self) -> Optional[SentenceAlignmentResult]:
        """Align sentences once per document; later calls return None"""
        state = self.store.alignment_state
        if state.stage is AlignmentStage.SENTENCES_ALIGNED:
            self.logger.debug("Sentence alignment skipped: already done")
            return None

        deleted = self.deleted | state.deleted_paragraphs
        inserted = self.inserted | state.inserted_paragraphs
        start_time = time.time()
        result = SentenceAlignmentResult()

        source_runs = paragraph_runs(self.store, Side.SOURCE)
        target_runs = paragraph_runs(self.store, Side.TARGET)

        si = ti = 0
        while True:
            si = self._next_run(
                source_runs, si, deleted, result.skipped_source_paragraphs
            )
            ti = self._next_run(
                target_runs, ti, inserted, result.skipped_target_paragraphs
            )
            if si >= len(source_runs) or ti >= len(target_runs):
                break

            block = self._align_block(source_runs[si], target_runs[ti])
            result.blocks.append(block)
            for cell in block.cells:
                for source_key, target_key in cell.edges():
                    self.store.add_edge(source_key, target_key)
                    result.edges.append((source_key, target_key))
            si += 1
            ti += 1

        # Paragraphs past the matched prefix are left unaligned
        result.unmatched_source_paragraphs = [
            run.paragraph_id for run in source_runs[si:] if run.paragraph_id not in deleted
        ]
        result.unmatched_target_paragraphs = [
            run.paragraph_id for run in target_runs[ti:] if run.paragraph_id not in inserted
        ]
        if result.unmatched_source_paragraphs or result.unmatched_target_paragraphs:
            self.logger.warning(
                f"Unmatched trailing paragraphs left unaligned: "
                f"source={result.unmatched_source_paragraphs}, "
                f"target={result.unmatched_target_paragraphs}"
            )

        state.sentence_alignment = result
        state.stage = AlignmentStage.SENTENCES_ALIGNED
        result.elapsed_seconds = time.time() - start_time
        self.logger.info(
            f"Sentence alignment: {len(result.blocks)} blocks, "
            f"{len(result.edges)} edges in {result.elapsed_seconds:.3f}s"
        )
        return result

    def _align_block(
        self, source_run: ParagraphRun, target_run: ParagraphRun
    ) -> BlockAlignment:
        table = self.engine.fill(
            self._units(Side.SOURCE, source_run), self._units(Side.TARGET, target_run)
        )
        cells = list(table.backtrace())
        self.logger.debug(
            f"Block src¶{source_run.paragraph_id} ({len(source_run)}) ~ "
            f"tgt¶{target_run.paragraph_id} ({len(target_run)}): "
            f"{len(cells)} operations, cost {table.total_cost}"
        )
        return BlockAlignment(
            source_paragraph=source_run.paragraph_id,
            target_paragraph=target_run.paragraph_id,
            cells=cells,
            total_cost=table.total_cost,
        )
