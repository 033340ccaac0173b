"""
API module for bilingual text alignment.
Provides high-level interface for easy integration.
"""

from typing import Any, Dict, List, Optional, Tuple
from datetime import datetime
import json
import logging
import os
import time

from .corpus import BilingualCorpus
from .core.aligner import GaleChurchAligner
from .models import Side
from .output.formatter import OutputFormatter


class TextAligner:
    """Align a source file with its translation at paragraph and sentence level.

    Loads both files into a ``BilingualCorpus``, runs paragraph correction
    followed by sentence alignment, and exposes the result as a dict that
    can be saved as JSON or printed as a report.

    Args:
        source_path: Path to the source language file. Must exist.
        target_path: Path to the target language file. Must exist.
        **config: Overrides for DEFAULT_CONFIG and the cost model
            (char_ratio, variance, penalty_indel, ...).

    Raises:
        FileNotFoundError: If either file does not exist.

    Example:
        >>> aligner = TextAligner("source.txt", "target.txt")
        >>> result = aligner.align()
        >>> aligner.save_results(result, "output/")
        >>> aligner.print_report(result)
    """

    DEFAULT_CONFIG = {
        "paragraph_mode": "line",  # "line" or "blank"
        "correct_paragraphs": True,
    }

    def __init__(self, source_path: str, target_path: str, **config):
        self.logger = logging.getLogger(__name__)
        self.source_file = source_path
        self.target_file = target_path
        self.config = {**self.DEFAULT_CONFIG, **config}

        if not os.path.exists(source_path):
            raise FileNotFoundError(f"Source file '{source_path}' does not exist.")
        if not os.path.exists(target_path):
            raise FileNotFoundError(f"Target file '{target_path}' does not exist.")

        self.corpus = BilingualCorpus()
        load_start = time.time()
        self._load_files()
        self._loading_time = time.time() - load_start

    def _load_files(self):
        mode = self.config["paragraph_mode"]
        src_count = self.corpus.load_source(self.source_file, paragraph_mode=mode)
        tgt_count = self.corpus.load_target(self.target_file, paragraph_mode=mode)
        self.logger.info(
            f"Loading completed: {src_count} source sentences, {tgt_count} target sentences"
        )

    def _cost_config(self) -> Dict[str, Any]:
        return {k: v for k, v in self.config.items() if k not in self.DEFAULT_CONFIG}

    def align(self) -> Dict[str, Any]:
        """Run the alignment and return the result dict"""
        result = align_corpus(
            self.corpus,
            correct_paragraphs=self.config["correct_paragraphs"],
            **self._cost_config(),
        )
        result["stats"]["loading_time_seconds"] = round(self._loading_time, 4)
        result["stats"]["total_time_seconds"] = round(
            result["stats"]["total_time_seconds"] + self._loading_time, 4
        )
        result["performance"] = OutputFormatter.build_performance(
            result["stats"], [a["step_cost"] for a in result["alignments"]]
        )
        return result

    def save_results(
        self,
        result: Dict[str, Any],
        output_dir: Optional[str] = None,
        output_file: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Write the result as JSON.

        Path resolution:
        - Absolute paths are used as-is
        - Relative paths and simple filenames are resolved against output_dir
        - output_dir defaults to the current working directory
        - output_file defaults to "<source_basename>_alignment.json"

        Returns:
            result dict with an "io" key holding absolute paths and a timestamp
        """
        if output_dir is None:
            output_dir = os.getcwd()
        output_dir = os.path.normpath(os.path.abspath(output_dir))

        if output_file is None:
            base_name = os.path.splitext(os.path.basename(self.source_file))[0]
            output_file = f"{base_name}_alignment.json"
        output_path = (
            output_file
            if os.path.isabs(output_file)
            else os.path.join(output_dir, output_file)
        )
        os.makedirs(os.path.dirname(output_path) or output_dir, exist_ok=True)

        generated_at = datetime.now().isoformat()
        payload = {
            "metadata": {
                "source_file": os.path.abspath(self.source_file),
                "target_file": os.path.abspath(self.target_file),
                "generated_at": generated_at,
            },
            "configuration": self.config,
            "summary": result.get("summary", {}),
            "performance": result.get("performance", {}),
            "paragraph_correction": result.get("paragraph_correction"),
            "alignments": result.get("alignments", []),
        }

        # Write to temporary file first, then atomic rename
        temp_path = output_path + ".tmp"
        with open(temp_path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, ensure_ascii=False)
        os.replace(temp_path, output_path)

        result.setdefault("io", {})
        result["io"]["output_path"] = os.path.abspath(output_path)
        result["io"]["output_base"] = output_dir
        result["io"]["generated_at"] = generated_at
        return result

    def print_report(self, result: Dict[str, Any], level: str = "normal") -> str:
        """Print a summary report of the alignment and return it"""
        console_output = OutputFormatter.format_console(result, level=level)
        print("\n" + console_output)
        return console_output


def _alignment_records(corpus: BilingualCorpus, sentence_result) -> List[Dict[str, Any]]:
    records = []
    for block in sentence_result.blocks:
        for cell in reversed(block.cells):
            record = cell.to_dict()
            record["source_paragraph"] = block.source_paragraph
            record["target_paragraph"] = block.target_paragraph
            record["source_text"] = [corpus.text(k) for k in cell.source_keys]
            record["target_text"] = [corpus.text(k) for k in cell.target_keys]
            records.append(record)
    return records


def align_corpus(
    corpus: BilingualCorpus, correct_paragraphs: bool = True, **config
) -> Dict[str, Any]:
    """Align a loaded corpus in place and build the result dict"""
    start_time = time.time()
    source_paragraphs = len(corpus.paragraph_runs(Side.SOURCE))
    target_paragraphs = len(corpus.paragraph_runs(Side.TARGET))

    aligner = GaleChurchAligner(corpus, **config)
    if aligner.sentence_alignment_done:
        logging.getLogger(__name__).info(
            "Corpus already aligned; reporting the existing alignment"
        )
    aligner.align(correct_paragraphs=correct_paragraphs)

    # Results of the passes that actually ran on this document
    state = corpus.alignment_state
    correction = state.paragraph_correction
    sentences = state.sentence_alignment

    stats = {
        "source_paragraphs": correction.source_paragraphs if correction else source_paragraphs,
        "target_paragraphs": correction.target_paragraphs if correction else target_paragraphs,
        "source_sentences": len(corpus.ordered_keys(Side.SOURCE)),
        "target_sentences": len(corpus.ordered_keys(Side.TARGET)),
        "total_edges": len(sentences.edges),
        "aligned_blocks": len(sentences.blocks),
        "sentence_operations": sentences.operation_counts(),
        "deleted_paragraphs": sorted(aligner.deleted_paragraphs),
        "inserted_paragraphs": sorted(aligner.inserted_paragraphs),
        "renumbered_units": correction.renumbered_units if correction else 0,
        "unmatched_source_paragraphs": sentences.unmatched_source_paragraphs,
        "unmatched_target_paragraphs": sentences.unmatched_target_paragraphs,
        "paragraph_time_seconds": correction.elapsed_seconds if correction else 0.0,
        "sentence_time_seconds": sentences.elapsed_seconds,
        "total_time_seconds": round(time.time() - start_time, 4),
    }
    alignments = _alignment_records(corpus, sentences)

    return {
        "stats": stats,
        "summary": OutputFormatter.build_summary(stats),
        "performance": OutputFormatter.build_performance(
            stats, [a["step_cost"] for a in alignments]
        ),
        "paragraph_correction": correction.to_dict() if correction else None,
        "alignments": alignments,
    }


def align_texts(
    source_text: str, target_text: str, paragraph_mode: str = "line", **config
) -> Tuple[BilingualCorpus, Dict[str, Any]]:
    """
    Convenience helper: align two in-memory texts.

    Returns the aligned corpus (its edges hold the sentence mapping) and the
    result dict.
    """
    correct_paragraphs = config.pop("correct_paragraphs", True)
    corpus = BilingualCorpus.from_texts(source_text, target_text, paragraph_mode)
    return corpus, align_corpus(corpus, correct_paragraphs=correct_paragraphs, **config)
