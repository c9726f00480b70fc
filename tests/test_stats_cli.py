import logging
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

import stats_cli


LOG_LINES = [
    "2006-08-27T11:17|0,0|300|FR",
    "",
    "2006-08-27T11:18|3,4|0|AU",
    "malformed|line",
    "2006-08-27T11:19|3,4|-500|US",
    "2006-08-27T11:20|3,4|250|de",
]


def _write_log(tmp_path: Path, lines) -> Path:
    path = tmp_path / "flight.log"
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def test_prints_selected_stats(tmp_path, capsys):
    path = _write_log(tmp_path, LOG_LINES)

    code = stats_cli.main(["--input", str(path), "--temp-min", "--temp-max", "--observations", "--distance"])
    out = capsys.readouterr().out.splitlines()

    assert code == 0
    assert out == [
        "Min temperature: 250",
        "Max temperature: 300",
        "Number of observations:",
        "    FR - 1",
        "    AU - 1",
        "    DE - 1",
        # FR (0,0) -> AU (3000,4000) -> DE (3000,4000)
        "Total distance: 5000 meters",
    ]


def test_prints_only_requested_items(tmp_path, capsys):
    path = _write_log(tmp_path, LOG_LINES)

    code = stats_cli.main(["--input", str(path), "--temp-mean"])
    out = capsys.readouterr().out.splitlines()

    assert code == 0
    assert len(out) == 1
    assert out[0].startswith("Mean temperature: 274.38")


def test_missing_file_fails(tmp_path, caplog):
    caplog.set_level(logging.ERROR)

    code = stats_cli.main(["--input", str(tmp_path / "missing.log"), "--distance"])

    assert code == 1
    assert "missing.log" in caplog.text


def test_no_valid_records_fails(tmp_path, caplog):
    caplog.set_level(logging.ERROR)
    path = _write_log(tmp_path, ["", "garbage", "2006-08-27T11:19|3,4|-500|US"])

    code = stats_cli.main(["--input", str(path), "--temp-min"])

    assert code == 1
    assert "no records were found" in caplog.text


def test_run_pipeline_returns_stats(tmp_path):
    path = _write_log(tmp_path, LOG_LINES)

    stats = stats_cli.run_pipeline(str(path))

    assert stats.number_of_records == 3
    assert stats.distance == 5000
