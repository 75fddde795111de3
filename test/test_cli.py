from pathlib import Path

from openpyxl import load_workbook

from posledger.main import main


def test_summary_and_export_commands(tmp_path: Path, monkeypatch, capsys):
    monkeypatch.setenv("POSLEDGER_HOME", str(tmp_path / "home"))

    assert main(["summary", "--store", "store_1"]) == 0
    out = capsys.readouterr().out
    assert "Revenue:" in out
    assert "75,000.00" in out

    target = tmp_path / "out.xlsx"
    assert main(["export", str(target)]) == 0
    assert load_workbook(target).sheetnames[0] == "Summary"


def test_health_and_reset_commands(tmp_path: Path, monkeypatch, capsys):
    monkeypatch.setenv("POSLEDGER_HOME", str(tmp_path / "home"))

    assert main(["health"]) == 0
    assert "integrity=ok" in capsys.readouterr().out
    assert main(["reset"]) == 0
    assert (tmp_path / "home" / "ledger.db").exists()
