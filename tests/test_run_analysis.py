"""
Command-line entry point tests.
"""

import pandas as pd

import run_analysis


def test_missing_field_exits_with_error(capsys):
    assert run_analysis.main([]) == 1
    assert "field required" in capsys.readouterr().out


def test_sample_field_writes_csv(tmp_path, capsys):
    out = tmp_path / "ranked.csv"
    assert run_analysis.main(["--field-id", "1", "--csv", str(out), "--top", "2"]) == 0

    printed = capsys.readouterr().out
    assert "Soybeans" in printed
    df = pd.read_csv(out)
    assert len(df) == 5
    assert df.loc[0, "Crop"] == "Soybeans"


def test_custom_field_with_avoid_list():
    assert run_analysis.main(["--field-id", "north", "--area", "12", "--texture", "clay",
                              "--avoid", "corn", "wheat"]) == 0


def test_bad_area_is_rejected(capsys):
    assert run_analysis.main(["--field-id", "north", "--area", "-4"]) == 1
    assert "area" in capsys.readouterr().out


def test_unreadable_catalog_exits_with_error(tmp_path, capsys):
    empty = tmp_path / "empty.csv"
    empty.write_text("")
    assert run_analysis.main(["--field-id", "1", "--catalog", str(empty)]) == 1
    assert run_analysis.main(["--field-id", "1", "--catalog", str(tmp_path / "missing.csv")]) == 1
    out = capsys.readouterr().out
    assert "empty.csv" in out
    assert "missing.csv" in out
