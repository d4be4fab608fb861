"""
Tests for the command line interface.

Run with: python -m pytest tests/test_cli.py
"""

import json

from map_coloring.cli import EXIT_BAD_INPUT, EXIT_OK, EXIT_UNSOLVED, main


def test_samples_lists_builtin_maps(capsys):
    assert main(["samples"]) == EXIT_OK
    out = capsys.readouterr().out
    assert "australia: regions=7" in out
    assert "usa: regions=6" in out


def test_solve_sample(capsys):
    assert main(["solve", "sample:australia"]) == EXIT_OK
    out = capsys.readouterr().out
    assert "Colored sample:australia with 4 colors" in out
    assert "sa (South Australia): #3B82F6" in out


def test_solve_reports_failure(capsys):
    assert main(["solve", "sample:australia", "--colors", "2"]) == EXIT_UNSOLVED
    assert "Failed to color" in capsys.readouterr().out


def test_solve_with_trace(capsys):
    assert main(["solve", "sample:usa", "--colors", "3", "--trace"]) == EXIT_OK
    out = capsys.readouterr().out
    assert "Step 1: Trying" in out


def test_solve_rejects_oversized_palette(capsys):
    assert main(["solve", "sample:usa", "--colors", "9"]) == EXIT_BAD_INPUT
    assert "Solver error" in capsys.readouterr().out


def test_unknown_sample_and_missing_file(tmp_path, capsys):
    assert main(["solve", "sample:atlantis"]) == EXIT_BAD_INPUT
    assert main(["solve", str(tmp_path / "missing.json")]) == EXIT_BAD_INPUT
    assert "Could not load map" in capsys.readouterr().out


def test_validate_and_strict_solve(tmp_path, capsys):
    path = tmp_path / "broken.json"
    path.write_text(
        json.dumps({"regions": [{"id": "a", "name": "A", "adjacentRegions": ["b", "ghost"]}, {"id": "b", "name": "B"}]}),
        encoding="utf-8",
    )
    assert main(["validate", str(path)]) == EXIT_BAD_INPUT
    out = capsys.readouterr().out
    assert "issues=2" in out
    assert "dangling" in out

    assert main(["solve", str(path), "--strict"]) == EXIT_BAD_INPUT
    assert main(["solve", str(path), "--strict", "--symmetrize", "--colors", "2"]) == EXIT_OK


def test_validate_clean_sample(capsys):
    assert main(["validate", "sample:australia"]) == EXIT_OK
    assert "edges=10, issues=0" in capsys.readouterr().out


def test_trace_prints_each_step_before_the_summary(capsys):
    assert main(["solve", "sample:australia", "--colors", "2", "--trace"]) == EXIT_UNSOLVED
    lines = capsys.readouterr().out.splitlines()
    step_lines = [ln for ln in lines if ln.startswith("Step ")]
    summary = lines[-1]
    assert summary.startswith("Failed to color")
    assert f"steps={len(step_lines)}," in summary
    assert lines.index(step_lines[-1]) < len(lines) - 1
    assert any("Backtracking from region" in ln for ln in step_lines)
