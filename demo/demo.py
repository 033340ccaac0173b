#!/usr/bin/env python3
"""
GC Aligner Demo Script

This script demonstrates basic usage of the gc_aligner API.

Usage:
    python demo.py

Requirements:
    - Install the package: pip install -e .
    - Run from the project root directory
"""

import logging
from pathlib import Path

from gc_aligner import TextAligner


def main():
    """Main demo function"""

    # Set demo logging level to DEBUG
    logging.basicConfig(
        level=logging.DEBUG, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    # Disable propagation to avoid duplicate output
    gc_logger = logging.getLogger("gc_aligner")
    gc_logger.propagate = False

    # Define file paths
    demo_dir = Path(__file__).parent
    source_file = demo_dir / "sample_en.txt"
    target_file = demo_dir / "sample_fr.txt"
    output_dir = demo_dir / "output"

    print("GC Aligner Demo")
    print("=" * 50)
    print(f"Source file: {source_file}")
    print(f"Target file: {target_file}")
    print(f"Output directory: {output_dir}")
    print()

    output_dir.mkdir(exist_ok=True)

    # The French side runs a little longer than the English one
    config = {"char_ratio": 1.1}

    aligner = TextAligner(str(source_file), str(target_file), **config)
    result = aligner.align()

    aligner.save_results(result, str(output_dir))
    aligner.print_report(result, level="verbose")

    print("\nDemo completed successfully!")


if __name__ == "__main__":
    main()
