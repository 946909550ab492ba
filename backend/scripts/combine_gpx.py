#!/usr/bin/env python3
"""CLI script for combining GPX files into one multi-track GPX.

Each input file becomes one track, in argument order.

Usage:
    # Combine three files into combined.gpx
    python backend/scripts/combine_gpx.py day1.gpx day2.gpx day3.gpx

    # Custom output path, overwrite if it exists
    python backend/scripts/combine_gpx.py day2.gpx day1.gpx \
        --output trip.gpx --force
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.config import settings
from app.features.combine import (
    PathFileSource,
    ProcessingCoordinator,
    ProcessingState,
)
from app.features.gpx.exceptions import GPXCombineError


class ProgressPrinter:
    """Print one line per file as it reaches a terminal status."""

    def __init__(self):
        self.reported: set[int] = set()

    def __call__(self, state: ProcessingState) -> None:
        for ref in state.files:
            if not ref.status.is_terminal or ref.ordinal in self.reported:
                continue
            self.reported.add(ref.ordinal)
            line = f"[{state.progress:3d}%] {ref.name}: {ref.status.value}"
            if ref.error:
                line += f" ({ref.error})"
            print(line)


async def combine_files(paths: list[Path]) -> str:
    coordinator = ProcessingCoordinator()
    coordinator.subscribe(ProgressPrinter())
    return await coordinator.combine([PathFileSource(p) for p in paths])


def main():
    parser = argparse.ArgumentParser(
        description="Combine GPX files into one GPX with one track per file"
    )
    parser.add_argument(
        "files",
        nargs="+",
        type=Path,
        help="GPX files, in track order",
    )
    parser.add_argument(
        "--output", "-o",
        type=Path,
        default=Path(settings.output_filename),
        help=f"Output file (default: {settings.output_filename})",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite the output file if it exists",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    if args.output.exists() and not args.force:
        print(f"Output exists: {args.output} (use --force to overwrite)")
        sys.exit(1)

    try:
        document = asyncio.run(combine_files(args.files))
    except GPXCombineError as e:
        print(f"Error: {e}")
        sys.exit(1)

    args.output.write_text(document, encoding="utf-8")
    print(f"Saved {len(args.files)} tracks to {args.output}")


if __name__ == "__main__":
    main()
