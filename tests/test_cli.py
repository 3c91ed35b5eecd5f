import json

import pandas as pd

from conftest import build_rows

from timetable_search.cli import main
from timetable_search.store import TimetableStore


def _timetable(write_xlsx):
    return write_xlsx(
        [
            (
                "Monday",
                build_rows(
                    ["9-10", "10-11", "11-12"],
                    [["Room101", "CS101\nLab", None, "MT104"], ["Room102", None, "CS101", None]],
                ),
            ),
        ]
    )


def test_cli_prints_matching_entries_as_json(write_xlsx, capsys):
    path = _timetable(write_xlsx)

    exit_code = main([str(path), "--terms", "CS101"])

    assert exit_code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload == [
        {"day": "Monday", "class_info": {"venue": "Room101", "time": "9 - 12", "course": "CS101 Lab"}},
        {"day": "Monday", "class_info": {"venue": "Room102", "time": "10 - 11", "course": "CS101"}},
    ]


def test_cli_free_slots_table_output(write_xlsx, capsys):
    path = _timetable(write_xlsx)

    exit_code = main([str(path), "--free", "--format", "table"])

    assert exit_code == 0
    out = capsys.readouterr().out
    assert out.startswith("Monday:")
    assert "Room102" in out and "9 - 10" in out


def test_cli_reports_no_results(write_xlsx, capsys):
    path = _timetable(write_xlsx)

    assert main([str(path), "--terms", "EE999"]) == 0
    assert capsys.readouterr().out.strip() == "No results found."


def test_cli_exports_and_saves(tmp_path, write_xlsx):
    path = _timetable(write_xlsx)
    output_dir = tmp_path / "reports"
    store_path = tmp_path / "store.json"

    exit_code = main(
        [
            str(path),
            "--terms",
            "MT104, CS101",
            "--output-dir",
            str(output_dir),
            "--save",
            "--store",
            str(store_path),
            "--key",
            "monday",
            "--quiet",
        ]
    )

    assert exit_code == 0
    assert (output_dir / "timetable.csv").exists()
    assert (output_dir / "timetable.json").exists()
    saved = TimetableStore(store_path).load("monday")
    assert [entry.class_info.course for entry in saved] == ["CS101 Lab", "CS101", "MT104"]


def test_cli_uses_terms_from_config(tmp_path, write_xlsx, capsys):
    path = _timetable(write_xlsx)
    config_path = tmp_path / "config.yaml"
    config_path.write_text("search:\n  terms: [MT104]\n", encoding="utf-8")

    assert main([str(path), "--config", str(config_path)]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert [item["class_info"]["course"] for item in payload] == ["MT104"]


def test_cli_requires_search_terms(write_xlsx):
    path = _timetable(write_xlsx)

    assert main([str(path)]) == 1
    assert main([str(path), "--terms", " , "]) == 1


def test_cli_fails_for_unreadable_workbook(tmp_path):
    assert main([str(tmp_path / "missing.xlsx"), "--terms", "CS101"]) == 1


def test_cli_exports_to_configured_output_directory(tmp_path, write_xlsx):
    path = _timetable(write_xlsx)
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        "search:\n  terms: [CS101]\noutput:\n  directory: reports\n", encoding="utf-8"
    )

    assert main([str(path), "--config", str(config_path), "--quiet"]) == 0

    csv_path = tmp_path / "reports" / "timetable.csv"
    assert csv_path.exists()
    assert (tmp_path / "reports" / "timetable.json").exists()
    assert list(pd.read_csv(csv_path)["course"]) == ["CS101 Lab", "CS101"]


def test_cli_skips_export_without_output_settings(tmp_path, write_xlsx, monkeypatch):
    path = _timetable(write_xlsx)
    monkeypatch.chdir(tmp_path)

    assert main([str(path), "--terms", "CS101", "--quiet"]) == 0
    assert not (tmp_path / "output").exists()


def test_cli_store_option_implies_save(tmp_path, write_xlsx):
    path = _timetable(write_xlsx)
    store_path = tmp_path / "store.json"

    assert main([str(path), "--terms", "MT104", "--store", str(store_path), "--quiet"]) == 0

    saved = TimetableStore(store_path).load()
    assert [entry.class_info.course for entry in saved] == ["MT104"]
