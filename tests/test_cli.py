import json
from pathlib import Path

import pytest

from sjf_sim.cli import build_parser, main


@pytest.fixture(autouse=True)
def wide_console(monkeypatch):
    monkeypatch.setenv("COLUMNS", "200")


def test_calc_prints_table_and_averages(capsys):
    assert main(["calc", "-n", "3", "-a", "0 1 2", "-b", "2 4 1"]) == 0
    out = capsys.readouterr().out
    assert "Gantt Chart" in out
    assert "Average WT: 0.67" in out
    assert "Average TAT: 3.00" in out
    assert "Average CT: 4.00" in out


def test_calc_json_output(capsys):
    assert main(["calc", "-n", "1", "-a", "3", "-b", "2", "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["final_clock"] == 5
    assert [seg["pid"] for seg in data["timeline"]] == [0, 0, 0, 1]
    assert data["processes"][0]["waiting_time"] == 0


def test_calc_json_jump_idle(capsys):
    assert main(["calc", "-n", "1", "-a", "3", "-b", "2", "--json", "--jump-idle"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["timeline"] == [
        {"pid": 0, "start_time": 0, "end_time": 3},
        {"pid": 1, "start_time": 3, "end_time": 5},
    ]


def test_calc_rejects_mismatched_counts(capsys):
    assert main(["calc", "-n", "3", "-a", "0 1", "-b", "2 4 1"]) == 2
    out = capsys.readouterr().out
    assert "must have exactly 3 values" in out
    assert "Average" not in out


def test_run_workload(tmp_path: Path, capsys):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":1,"arrival_time":0,"burst_time":3},'
                 '{"pid":2,"arrival_time":0,"burst_time":3}]')
    assert main(["run", "-w", str(p), "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert [seg["pid"] for seg in data["timeline"]] == [1, 2]


def test_run_missing_file(tmp_path: Path, capsys):
    assert main(["run", "-w", str(tmp_path / "nope.json")]) == 2
    assert "Error" in capsys.readouterr().out


def test_form_prompts(monkeypatch, capsys):
    answers = iter(["2", "0 0", "3 3"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))
    assert main(["form", "--json"]) == 0
    out = capsys.readouterr().out
    data = json.loads(out[out.index("{"):])
    assert [seg["pid"] for seg in data["timeline"]] == [1, 2]


def test_verbose_flag():
    args = build_parser().parse_args(["-v", "calc", "-n", "1", "-a", "0", "-b", "1"])
    assert args.verbose
    assert args.log_level == "WARNING"


@pytest.mark.parametrize("precision", ["-1", "11", "40", "two"])
def test_precision_out_of_range_is_rejected(precision, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["calc", "-n", "1", "-a", "0", "-b", "1", "--precision", precision])
    assert excinfo.value.code == 2
    assert "precision" in capsys.readouterr().err


def test_precision_changes_decimal_places(capsys):
    assert main(["calc", "-n", "3", "-a", "0 1 2", "-b", "2 4 1", "--precision", "4"]) == 0
    assert "Average WT: 0.6667" in capsys.readouterr().out


def test_validation_error_reported_once(capsys):
    assert main(["calc", "-n", "3", "-a", "0 1", "-b", "2 4 1"]) == 2
    captured = capsys.readouterr()
    assert (captured.out + captured.err).count("must have exactly 3 values") == 1


def test_plain_gantt_chart(capsys):
    assert main(["calc", "-n", "2", "-a", "0 4", "-b", "2 1", "--plain"]) == 0
    out = capsys.readouterr().out
    assert "|==..=|" in out
    assert "Average CT" in out
