"""Unified output formatting for alignment results and console reports"""

from typing import Any, Dict, List, Optional
import numpy as np


class OutputFormatter:
    """Formats alignment results into the unified schema and console output"""

    OUTPUT_LEVELS = {"minimal", "normal", "verbose"}
    DEFAULT_LEVEL = "normal"
    PERCENTILES = (50, 75, 90, 95, 99)

    @staticmethod
    def build_summary(
        stats: Dict[str, Any], operation_breakdown: Optional[Dict[str, int]] = None
    ) -> Dict[str, Any]:
        """Build summary layer from raw stats

        Args:
            stats: Raw statistics dict from the aligner
            operation_breakdown: Optional sentence operation counts keyed "1:1", "2:1", ...

        Returns:
            Structured summary dict with edges, operation breakdown, paragraph and file info
        """
        if operation_breakdown is None:
            operation_breakdown = stats.get("sentence_operations", {}) or {}

        return {
            "total_edges": stats.get("total_edges", 0),
            "aligned_blocks": stats.get("aligned_blocks", 0),
            "operation_breakdown": dict(operation_breakdown),
            "paragraphs": {
                "deleted": stats.get("deleted_paragraphs", []),
                "inserted": stats.get("inserted_paragraphs", []),
                "renumbered_units": stats.get("renumbered_units", 0),
                "unmatched_source": stats.get("unmatched_source_paragraphs", []),
                "unmatched_target": stats.get("unmatched_target_paragraphs", []),
            },
            "files": {
                "source": {
                    "paragraphs": stats.get("source_paragraphs", 0),
                    "sentences": stats.get("source_sentences", 0),
                },
                "target": {
                    "paragraphs": stats.get("target_paragraphs", 0),
                    "sentences": stats.get("target_sentences", 0),
                },
            },
        }

    @staticmethod
    def build_performance(
        stats: Dict[str, Any], step_costs: Optional[List[int]] = None
    ) -> Dict[str, Any]:
        """Build performance layer: timing and step-cost statistics"""
        timing_seconds = {
            "total": round(stats.get("total_time_seconds", 0.0), 4),
            "loading": round(stats.get("loading_time_seconds", 0.0), 4),
            "paragraph_correction": round(stats.get("paragraph_time_seconds", 0.0), 4),
            "sentence_alignment": round(stats.get("sentence_time_seconds", 0.0), 4),
        }
        return {
            "timing_seconds": timing_seconds,
            "cost_statistics": OutputFormatter.compute_cost_statistics(step_costs or []),
        }

    @staticmethod
    def compute_cost_statistics(costs: List[int]) -> Dict[str, Any]:
        """Distribution of per-operation costs; high percentiles point at weak spots"""
        if not costs:
            stats = {"count": 0, "mean": 0.0, "stdev": 0.0, "min": 0, "max": 0}
            stats.update({f"p{p}": 0.0 for p in OutputFormatter.PERCENTILES})
            return stats

        values = np.asarray(costs, dtype=np.float64)
        stats = {
            "count": int(values.size),
            "mean": round(float(values.mean()), 4),
            "stdev": round(float(values.std(ddof=1)) if values.size > 1 else 0.0, 4),
            "min": int(values.min()),
            "max": int(values.max()),
        }
        for p, value in zip(
            OutputFormatter.PERCENTILES,
            np.percentile(values, OutputFormatter.PERCENTILES),
        ):
            stats[f"p{p}"] = round(float(value), 4)
        return stats

    @staticmethod
    def format_console(result: Dict[str, Any], level: str = "normal") -> str:
        """Format result as console output

        Args:
            result: Alignment result dict
            level: Output level (minimal, normal, verbose)
        """
        if level not in OutputFormatter.OUTPUT_LEVELS:
            level = OutputFormatter.DEFAULT_LEVEL

        if level == "minimal":
            return OutputFormatter._format_minimal(result)
        elif level == "normal":
            return OutputFormatter._format_normal(result)
        else:
            return OutputFormatter._format_verbose(result)

    @staticmethod
    def _format_minimal(result: Dict[str, Any]) -> str:
        summary = result.get("summary", {})
        lines = [f"[OK] Alignment completed: {summary.get('total_edges', 0)} edges"]
        output_base = result.get("io", {}).get("output_base")
        if output_base:
            lines.append(f"     Saved to: {output_base}")
        return "\n".join(lines)

    @staticmethod
    def _format_normal(result: Dict[str, Any]) -> str:
        summary = result.get("summary", {})
        breakdown = summary.get("operation_breakdown", {})
        paragraphs = summary.get("paragraphs", {})

        used = [f"{op}x{count}" for op, count in breakdown.items() if count > 0]
        lines = [
            f"[OK] Alignment completed: {summary.get('total_edges', 0)} edges in "
            f"{summary.get('aligned_blocks', 0)} blocks ({' / '.join(used) or 'none'})"
        ]

        deleted = paragraphs.get("deleted", [])
        inserted = paragraphs.get("inserted", [])
        if deleted or inserted or paragraphs.get("renumbered_units", 0):
            lines.append(
                f"     Paragraphs: deleted={deleted}, inserted={inserted}, "
                f"renumbered units={paragraphs.get('renumbered_units', 0)}"
            )

        unmatched_src = paragraphs.get("unmatched_source", [])
        unmatched_tgt = paragraphs.get("unmatched_target", [])
        if unmatched_src or unmatched_tgt:
            lines.append(
                f"[WARN] Unaligned trailing paragraphs: source={unmatched_src}, "
                f"target={unmatched_tgt}"
            )

        output_base = result.get("io", {}).get("output_base")
        if output_base:
            lines.append(f"     Saved to: {output_base}")
        return "\n".join(lines)

    @staticmethod
    def _format_verbose(result: Dict[str, Any]) -> str:
        """Normal output plus detailed stats and the costliest operations"""
        lines = [OutputFormatter._format_normal(result), ""]

        files = result.get("summary", {}).get("files", {})
        src = files.get("source", {})
        tgt = files.get("target", {})
        performance = result.get("performance", {})
        timing = performance.get("timing_seconds", {})
        costs = performance.get("cost_statistics", {})

        lines.extend(
            [
                "--- DETAILED STATS ---",
                f"  Files: source {src.get('paragraphs', 0)} paragraphs / {src.get('sentences', 0)} sentences",
                f"         target {tgt.get('paragraphs', 0)} paragraphs / {tgt.get('sentences', 0)} sentences",
                f"  Step cost: mean={costs.get('mean', 0):.1f}, p95={costs.get('p95', 0):.1f}, max={costs.get('max', 0)}",
                f"  Timing: total={timing.get('total', 0):.2f}s (loading={timing.get('loading', 0):.2f}s, "
                f"paragraphs={timing.get('paragraph_correction', 0):.2f}s, sentences={timing.get('sentence_alignment', 0):.2f}s)",
                "",
            ]
        )

        alignments = result.get("alignments", [])
        costly = sorted(
            (a for a in alignments if a.get("operation") != "1:1"),
            key=lambda a: a.get("step_cost", 0),
            reverse=True,
        )
        if costly:
            lines.append("NON 1:1 ALIGNMENTS (costliest first)")
            for i, alignment in enumerate(costly[:5], 1):
                lines.append(
                    f"  [{i}] {alignment.get('operation')} cost={alignment.get('step_cost', 0)}"
                )
                for label, texts in (
                    ("src", alignment.get("source_text", [])),
                    ("tgt", alignment.get("target_text", [])),
                ):
                    for text in texts:
                        if len(text) > 80:
                            text = text[:77] + "..."
                        lines.append(f"       {label}: {text}")
            if len(costly) > 5:
                lines.append(f"  ... {len(costly) - 5} more in the results file")

        return "\n".join(lines)
