# tests/test_orchestrator.py
"""Batch tests: per-file records, failure isolation, JSON artifact and console report."""

from __future__ import annotations

import importlib
import json

import pytest

orch = importlib.import_module("flag_color_extractor.extraction.orchestrator")
lc = importlib.import_module("flag_color_extractor.extraction.general.utils.load_config")
constants = importlib.import_module("flag_color_extractor.extraction.color.constants")

CC = constants.CanonicalColor
NS = 'xmlns="http://www.w3.org/2000/svg"'

FLAGS = {
    "fr": f'<svg {NS}><rect fill="#002395"/><rect fill="#fff"/><rect fill="#ED2939"/></svg>',
    "jp": f'<svg {NS}><rect fill="#fff"/><circle fill="#bc002d"/></svg>',
    "gr": f'<svg {NS}><rect fill="#001f6e"/><rect fill="#7fd4ff"/><rect fill="#fff"/></svg>',
    "ly": f'<svg {NS}><rect width="3" height="2"/></svg>',
}


@pytest.fixture
def flags_dir(tmp_path):
    d = tmp_path / "flags"
    d.mkdir()
    for iso, text in FLAGS.items():
        (d / f"{iso}.svg").write_text(text, encoding="utf-8")
    return d


# ──────────────────────────────────────────────────────────────────────────────
# Per-file
# ──────────────────────────────────────────────────────────────────────────────
def test_flag_id_from_path():
    assert orch.flag_id_from_path("data/flags/us.svg") == "US"


def test_find_flag_files_sorted_and_skips_artifacts(flags_dir):
    (flags_dir / "_colors.svg").write_text("x", encoding="utf-8")
    (flags_dir / "notes.txt").write_text("x", encoding="utf-8")
    assert [p.stem for p in orch.find_flag_files(flags_dir)] == ["fr", "gr", "jp", "ly"]


def test_process_flag_file_record(flags_dir):
    rec = orch.process_flag_file(flags_dir / "gr.svg")
    assert rec.flag_id == "GR"
    assert rec.colors == (CC.WHITE, CC.BLUE, CC.LIGHT_BLUE)
    assert rec.raw_color_count == 3
    assert rec.raw_blue_count == 2
    assert rec.blue_exception_applied is True
    assert rec.to_dict() == {
        "colors": ["white", "blue", "light blue"],
        "colorCount": 3,
        "rawColorCount": 3,
    }


def test_record_blue_exception_comes_from_scan(flags_dir):
    assert orch.process_flag_file(flags_dir / "fr.svg").blue_exception_applied is False
    rec = orch.FlagColorRecord(
        flag_id="ZZ", colors=(CC.BLUE, CC.LIGHT_BLUE), raw_color_count=2, raw_blue_count=2
    )
    assert rec.blue_exception_applied is False


def test_process_missing_file_raises(tmp_path):
    with pytest.raises(orch.FlagProcessingError) as ei:
        orch.process_flag_file(tmp_path / "zz.svg")
    assert ei.value.flag_id == "ZZ"


def test_process_non_utf8_file_raises(tmp_path):
    p = tmp_path / "xx.svg"
    p.write_bytes(b"<svg>\xff\xfe</svg>")
    with pytest.raises(orch.FlagProcessingError):
        orch.process_flag_file(p)


# ──────────────────────────────────────────────────────────────────────────────
# Batch
# ──────────────────────────────────────────────────────────────────────────────
def test_batch_survives_one_corrupted_file(flags_dir):
    (flags_dir / "xx.svg").write_text("<svg><rect></svg", encoding="utf-8")
    files = orch.find_flag_files(flags_dir)
    result = orch.extract_flag_colors(files)
    assert len(files) == 5
    assert result.processed == 4
    assert list(result.failures) == ["XX"]
    assert list(result.records) == ["FR", "GR", "JP", "LY"]


def test_batch_survives_oversized_rgb_channel(tmp_path):
    (tmp_path / "aa.svg").write_text(FLAGS["jp"], encoding="utf-8")
    (tmp_path / "bb.svg").write_text(
        f'<svg {NS}><rect fill="rgb({"9" * 5000},0,0)"/></svg>', encoding="utf-8"
    )
    result = orch.extract_flag_colors(orch.find_flag_files(tmp_path))
    assert list(result.records) == ["AA", "BB"]
    assert result.records["BB"].colors == (CC.RED,)
    assert result.failures == {}


def test_unexpected_scan_error_is_isolated_per_file(flags_dir, monkeypatch):
    real = orch.extract_colors_from_svg

    def _flaky(text):
        if "bc002d" in text:
            raise RuntimeError("boom")
        return real(text)

    monkeypatch.setattr(orch, "extract_colors_from_svg", _flaky)
    result = orch.extract_flag_colors(orch.find_flag_files(flags_dir))
    assert list(result.records) == ["FR", "GR", "LY"]
    assert list(result.failures) == ["JP"]
    assert "RuntimeError" in result.failures["JP"]


def test_batch_missing_file_is_skipped(flags_dir, tmp_path):
    files = orch.find_flag_files(flags_dir) + [tmp_path / "nope.svg"]
    result = orch.extract_flag_colors(files)
    assert result.processed == 4
    assert "NOPE" in result.failures


def test_thread_pool_matches_sequential(flags_dir):
    files = orch.find_flag_files(flags_dir)
    seq = orch.extract_flag_colors(files)
    par = orch.extract_flag_colors(files, workers=3)
    assert par.to_dict() == seq.to_dict()
    assert list(par.records) == list(seq.records)


def test_color_counts_and_frequency(flags_dir):
    result = orch.extract_flag_colors(orch.find_flag_files(flags_dir))
    counts = result.color_counts
    assert counts[CC.WHITE] == 3
    assert counts[CC.RED] == 2
    assert counts[CC.BLACK] == 1
    freq = result.frequency()
    assert freq[0] == (CC.WHITE, 3)
    # equal counts follow palette order
    ones = [c for c, n in freq if n == 1]
    assert ones == sorted(ones, key=constants.PALETTE_ORDER.__getitem__)


def test_write_colors_json(flags_dir, tmp_path):
    result = orch.extract_flag_colors(orch.find_flag_files(flags_dir))
    out = orch.write_colors_json(result, tmp_path / "out" / "_colors.json")
    data = json.loads(out.read_text(encoding="utf-8"))
    assert list(data) == ["FR", "GR", "JP", "LY"]
    assert data["FR"] == {"colors": ["white", "red", "blue"], "colorCount": 3, "rawColorCount": 3}
    assert data["LY"]["colors"] == ["black"]
    assert data["LY"]["rawColorCount"] == 0


def test_output_is_byte_identical_across_runs(flags_dir, tmp_path):
    files = orch.find_flag_files(flags_dir)
    a = orch.write_colors_json(orch.extract_flag_colors(files), tmp_path / "a.json")
    b = orch.write_colors_json(orch.extract_flag_colors(files, workers=2), tmp_path / "b.json")
    assert a.read_bytes() == b.read_bytes()


# ──────────────────────────────────────────────────────────────────────────────
# Report & run
# ──────────────────────────────────────────────────────────────────────────────
def test_format_report_sections(flags_dir):
    (flags_dir / "xx.svg").write_text("broken", encoding="utf-8")
    result = orch.extract_flag_colors(orch.find_flag_files(flags_dir), samples=["jp", "us"])
    report = orch.format_report(result)
    assert "  FR: white, red, blue" in report
    assert "Blue exception applied (2 blues detected)" in report
    assert "XX: FAILED" in report
    assert "Flags processed: 4" in report
    assert "Flags failed:    1" in report
    assert "   white          3 █" in report
    assert "Sample extractions for verification:" in report
    assert "   JP: white, red" in report
    assert "   US:" not in report


def test_report_for_empty_colors():
    rec = orch.FlagColorRecord(flag_id="ZZ", colors=(), raw_color_count=0)
    result = orch.BatchResult(records={"ZZ": rec})
    assert "ZZ: (no colors found)" in orch.format_report(result)


def test_run_writes_artifact_and_prints(flags_dir, tmp_path, capsys):
    settings = lc.Settings(flags_dir=flags_dir, output=tmp_path / "res.json", samples=("FR",))
    result = orch.run(settings)
    assert result.processed == 4
    assert (tmp_path / "res.json").is_file()
    out = capsys.readouterr().out
    assert "Found 4 flag SVGs" in out
    assert "   FR: white, red, blue" in out


def test_run_missing_flags_dir(tmp_path):
    settings = lc.Settings(flags_dir=tmp_path / "missing", output=tmp_path / "o.json")
    with pytest.raises(FileNotFoundError):
        orch.run(settings)
