# src/flag_color_extractor/cli.py
import argparse
import dataclasses
import logging
import sys
from pathlib import Path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flag-colors",
        description="Extract canonical flag colors from a directory of SVG flags.",
    )
    parser.add_argument(
        "flags_dir",
        nargs="?",
        type=Path,
        help="Directory holding <iso>.svg files (default: <data>/flags)",
    )
    parser.add_argument("--output", "-o", type=Path, help="JSON artifact path")
    parser.add_argument("--data-dir", type=Path, dest="data_dir", help="Override the data/ directory")
    parser.add_argument("--workers", type=int, help="Parallel workers (default 1)")
    parser.add_argument(
        "--sample",
        action="append",
        dest="samples",
        metavar="ID",
        help="Flag id to spot-check in the report (repeatable)",
    )
    parser.add_argument("--debug", action="store_true", help="Verbose debug logs")
    return parser


def main(argv=None):
    """CLI: classify every flag SVG, write <flags_dir>/_colors.json and print a report."""
    from dotenv import load_dotenv

    from .extraction.general.utils import load_settings
    from .extraction.orchestrator import run

    args = build_parser().parse_args(argv)
    load_dotenv()
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_settings(args.data_dir)
        overrides = {}
        if args.flags_dir is not None:
            overrides["flags_dir"] = args.flags_dir.resolve()
            if args.output is None:
                overrides["output"] = overrides["flags_dir"] / "_colors.json"
        if args.output is not None:
            overrides["output"] = args.output.resolve()
        if args.workers is not None:
            overrides["workers"] = max(1, args.workers)
        if args.samples:
            overrides["samples"] = tuple(s.strip().upper() for s in args.samples)
        settings = dataclasses.replace(settings, **overrides)

        print("🎨 Flag Color Extractor\n")
        run(settings)
    except Exception as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
