import argparse
import os
import logging
from .api import TextAligner
from .corpus import PARAGRAPH_MODES
from .output.formatter import OutputFormatter
from .utils import build_config_from_args


def build_parser():
    parser = argparse.ArgumentParser(
        prog="gc-aligner",
        description="Gale-Church Paragraph and Sentence Alignment Tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  gc-aligner --source source.txt --target target.txt --output results/
  gc-aligner -s en.txt -t fr.txt -o output/ --paragraph-mode blank --level verbose
        """,
    )

    parser.add_argument(
        "-s", "--source", required=False, help="Path to the source language file"
    )
    parser.add_argument(
        "-t", "--target", required=False, help="Path to the target language file"
    )
    parser.add_argument(
        "-o", "--output", required=False, help="Output directory for results"
    )
    parser.add_argument(
        "--output-file",
        type=str,
        help="Filename for the alignment JSON. A simple filename or relative path is resolved against --output. Absolute paths are used as-is.",
    )
    parser.add_argument(
        "--paragraph-mode",
        choices=PARAGRAPH_MODES,
        default=None,
        help="How paragraphs are delimited: one per line (line) or separated by blank lines (blank). Default: line",
    )
    parser.add_argument(
        "--no-paragraph-correction",
        action="store_true",
        help="Skip paragraph correction and align sentences within paragraphs as given",
    )
    parser.add_argument(
        "--char-ratio",
        type=float,
        default=None,
        help="Expected target characters per source character (default: 1.0)",
    )
    parser.add_argument(
        "--variance",
        type=float,
        default=None,
        help="Variance of the length difference per character (default: 6.8)",
    )
    parser.add_argument(
        "--level",
        choices=sorted(OutputFormatter.OUTPUT_LEVELS),
        default=OutputFormatter.DEFAULT_LEVEL,
        help="Console report detail (default: normal)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output (show debug information)",
    )
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    # Configure logging
    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
        logging.getLogger("gc_aligner").setLevel(logging.DEBUG)
    else:
        logging.basicConfig(level=logging.INFO, format="%(message)s")

    # Validate input files
    if not args.source or not os.path.exists(args.source):
        logging.error(
            f"Error: Source file '{args.source}' does not exist or not provided"
        )
        return 1

    if not args.target or not os.path.exists(args.target):
        logging.error(
            f"Error: Target file '{args.target}' does not exist or not provided"
        )
        return 1

    if not args.output:
        logging.error("Error: --output is required")
        return 1

    os.makedirs(args.output, exist_ok=True)
    config = build_config_from_args(args)

    try:
        aligner = TextAligner(args.source, args.target, **config)
        result = aligner.align()
        saved_result = aligner.save_results(
            result, args.output, output_file=args.output_file
        )
        aligner.print_report(saved_result, level=args.level)

        logging.info(f"Alignment written: {saved_result['io']['output_path']}")
        return 0
    except (OSError, ValueError) as e:
        logging.error(f"Error during alignment: {e}")
        return 1


if __name__ == "__main__":
    exit(main())
