# orchestrator.py
from __future__ import annotations

"""
orchestrator.py
===============

Does: Batch orchestration over a directory of flag SVGs: classify each file,
      aggregate per-flag records and color frequencies, persist the JSON artifact,
      and render the console report.
Returns:
  - extract_flag_colors(paths) -> BatchResult
  - run(settings) -> BatchResult (also writes <output> and prints the report)
Used by: The `flag-colors` CLI and downstream data scripts (country merge).
"""

import json
import logging
from collections import Counter
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Sequence, TextIO, Tuple

from flag_color_extractor.extraction.color.constants import PALETTE_ORDER, CanonicalColor
from flag_color_extractor.extraction.general.utils import debug
from flag_color_extractor.extraction.general.utils.load_config import (
    DEFAULT_SAMPLE_FLAGS,
    Settings,
)
from flag_color_extractor.extraction.svg import SvgScanError, extract_colors_from_svg

logger = logging.getLogger(__name__)

__all__ = [
    "FlagColorRecord",
    "FlagProcessingError",
    "BatchResult",
    "flag_id_from_path",
    "find_flag_files",
    "process_flag_file",
    "extract_flag_colors",
    "write_colors_json",
    "format_report",
    "run",
]

HISTOGRAM_UNIT = 5  # one bar cell per N flags


class FlagProcessingError(Exception):
    """Raise when one flag file cannot be read or scanned; the batch skips it."""

    def __init__(self, flag_id: str, message: str):
        super().__init__(f"{flag_id}: {message}")
        self.flag_id = flag_id


# =============================================================================
# Records
# =============================================================================

@dataclass(frozen=True)
class FlagColorRecord:
    """Colors of one flag, in palette order, with raw counts for diagnostics."""

    flag_id: str
    colors: Tuple[CanonicalColor, ...]
    raw_color_count: int
    raw_blue_count: int = 0
    blue_exception_applied: bool = False

    @property
    def color_count(self) -> int:
        return len(self.colors)

    def to_dict(self) -> Dict[str, object]:
        """Does: JSON shape consumed by the country merge step."""
        return {
            "colors": [c.value for c in self.colors],
            "colorCount": self.color_count,
            "rawColorCount": self.raw_color_count,
        }


@dataclass
class BatchResult:
    """Aggregate of one run: records and failures keyed by flag id."""

    records: Dict[str, FlagColorRecord] = field(default_factory=dict)
    failures: Dict[str, str] = field(default_factory=dict)
    samples: Tuple[str, ...] = DEFAULT_SAMPLE_FLAGS

    @property
    def processed(self) -> int:
        return len(self.records)

    @property
    def color_counts(self) -> Counter:
        """Does: Number of flags using each canonical color."""
        counts: Counter = Counter()
        for record in self.records.values():
            counts.update(record.colors)
        return counts

    def frequency(self) -> List[Tuple[CanonicalColor, int]]:
        """Does: (color, count) sorted by count desc, then palette order."""
        return sorted(
            self.color_counts.items(), key=lambda kv: (-kv[1], PALETTE_ORDER[kv[0]])
        )

    def sample_records(self) -> List[FlagColorRecord]:
        """Does: Spot-check records that exist in this run, in sample order."""
        return [self.records[s] for s in self.samples if s in self.records]

    def to_dict(self) -> Dict[str, Dict[str, object]]:
        return {fid: self.records[fid].to_dict() for fid in sorted(self.records)}


# =============================================================================
# Per-file
# =============================================================================

def flag_id_from_path(path: Path) -> str:
    """'data/flags/us.svg' -> 'US'."""
    return Path(path).stem.upper()


def find_flag_files(flags_dir: Path) -> List[Path]:
    """Does: Sorted *.svg files of `flags_dir`, ignoring '_'-prefixed artifacts."""
    return sorted(
        p for p in Path(flags_dir).glob("*.svg") if p.is_file() and not p.name.startswith("_")
    )


def process_flag_file(path: Path) -> FlagColorRecord:
    """
    Does: Read one SVG (UTF-8), extract its colors, and build the record.
    Raises: FlagProcessingError for unreadable files, unscannable documents and
            any other error raised while scanning.
    """
    flag_id = flag_id_from_path(path)
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FlagProcessingError(flag_id, f"cannot read {path}: {e}") from e

    try:
        result = extract_colors_from_svg(text)
    except SvgScanError as e:
        raise FlagProcessingError(flag_id, str(e)) from e
    except Exception as e:
        logger.exception("%s: unexpected error while scanning", flag_id)
        raise FlagProcessingError(flag_id, f"unexpected {type(e).__name__}: {e}") from e

    if not result.colors:
        logger.info("%s: no colors found", flag_id)
    return FlagColorRecord(
        flag_id=flag_id,
        colors=result.colors,
        raw_color_count=result.raw_color_count,
        raw_blue_count=result.raw_blue_count,
        blue_exception_applied=result.blue_exception_applied,
    )


# =============================================================================
# Batch
# =============================================================================

def extract_flag_colors(
    paths: Iterable[Path],
    *,
    workers: int = 1,
    samples: Sequence[str] = DEFAULT_SAMPLE_FLAGS,
) -> BatchResult:
    """
    Does: Classify every file, skipping (and recording) per-file failures.
          With workers > 1 files are processed on a bounded thread pool; records
          are merged by flag id so completion order does not matter.
    Returns: BatchResult covering every input path exactly once.
    """
    paths = list(paths)
    result = BatchResult(samples=tuple(s.upper() for s in samples))

    def _merge(outcome: FlagColorRecord | FlagProcessingError) -> None:
        if isinstance(outcome, FlagProcessingError):
            logger.warning("Skipping %s", outcome)
            result.failures[outcome.flag_id] = str(outcome)
        else:
            result.records[outcome.flag_id] = outcome
            debug(f"{outcome.flag_id}: {[c.value for c in outcome.colors]}", topic="batch")

    def _safe(path: Path) -> FlagColorRecord | FlagProcessingError:
        try:
            return process_flag_file(path)
        except FlagProcessingError as e:
            return e

    if workers <= 1 or len(paths) <= 1:
        for path in paths:
            _merge(_safe(path))
    else:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [pool.submit(_safe, path) for path in paths]
            for fut in as_completed(futures):
                _merge(fut.result())

    result.records = dict(sorted(result.records.items()))
    result.failures = dict(sorted(result.failures.items()))
    logger.info("Processed %d flags (%d failed)", result.processed, len(result.failures))
    return result


def write_colors_json(result: BatchResult, path: Path) -> Path:
    """Does: Write {flag_id: {colors, colorCount, rawColorCount}} as indented UTF-8 JSON."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(result.to_dict(), indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
    )
    logger.info("Colors saved to %s", path)
    return path


# =============================================================================
# Report
# =============================================================================

def _color_list(record: FlagColorRecord) -> str:
    return ", ".join(c.value for c in record.colors) if record.colors else "(no colors found)"


def format_report(result: BatchResult) -> str:
    """Does: Render per-flag colors, failures, frequency histogram and spot-check samples."""
    lines: List[str] = []
    for fid, record in result.records.items():
        lines.append(f"  {fid}: {_color_list(record)}")
        if record.blue_exception_applied:
            lines.append(
                f"      ↳ Blue exception applied ({record.raw_blue_count} blues detected)"
            )
    for fid, message in result.failures.items():
        lines.append(f"  {fid}: FAILED ({message})")

    lines += ["", "=" * 50, "Statistics:", ""]
    lines.append(f"   Flags processed: {result.processed}")
    if result.failures:
        lines.append(f"   Flags failed:    {len(result.failures)}")
    lines += ["", "   Color frequency:"]
    for color, count in result.frequency():
        bar = "█" * round(count / HISTOGRAM_UNIT)
        lines.append(f"   {color.value:<12} {count:>3} {bar}")

    samples = result.sample_records()
    if samples:
        lines += ["", "Sample extractions for verification:"]
        for record in samples:
            lines.append(f"   {record.flag_id}: {_color_list(record)}")
    return "\n".join(lines)


def run(settings: Settings, *, stream: TextIO | None = None) -> BatchResult:
    """
    Does: Full batch: discover files, extract, write the artifact, print the report.
    Raises: FileNotFoundError when the flags directory does not exist.
    """
    flags_dir = Path(settings.flags_dir)
    if not flags_dir.is_dir():
        raise FileNotFoundError(f"Flags directory not found: {flags_dir}")

    files = find_flag_files(flags_dir)
    print(f"Found {len(files)} flag SVGs in {flags_dir}\n", file=stream)

    result = extract_flag_colors(files, workers=settings.workers, samples=settings.samples)
    write_colors_json(result, settings.output)

    print(format_report(result), file=stream)
    print(f"\nColors saved to: {settings.output}", file=stream)
    return result
