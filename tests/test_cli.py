import pandas as pd
import pytest

from conftest import build_roster
from roster.cli import main


@pytest.fixture
def db_url(tmp_path):
    url = f"sqlite:///{tmp_path / 'roster.db'}"
    main(["--db", url, "init-db"])
    staff_csv = tmp_path / "staff.csv"
    pd.DataFrame(
        [{"staff_id": s.staff_id, "name": s.name, "role": s.role} for s in build_roster()]
    ).to_csv(staff_csv, index=False)
    main(["--db", url, "import-csv", "--staff", str(staff_csv)])
    return url


@pytest.mark.integration
def test_generate_validate_and_export(db_url, tmp_path, capsys):
    out = tmp_path / "schedule.csv"
    main(["--db", db_url, "generate", "--start", "2025-03-10", "--end", "2025-03-16", "--out", str(out)])
    output = capsys.readouterr().out
    assert "Assigned 44 shifts" in output
    assert "[WARN] 2025-03-14 Caregiver (min): 0/7" in output
    assert len(pd.read_csv(out)) == 44

    main(["--db", db_url, "validate", "--start", "2025-03-10", "--end", "2025-03-16"])
    assert "[OK] Validation passed" in capsys.readouterr().out

    main(["--db", db_url, "summarize", "--start", "2025-03-10", "--end", "2025-03-16"])
    assert "Coverage per day per role:" in capsys.readouterr().out

    staff_out = tmp_path / "staff_out.csv"
    main(["--db", db_url, "export", "--staff", str(staff_out)])
    assert "[OK] Exported 11 staff" in capsys.readouterr().out


@pytest.mark.integration
def test_dry_run_then_delete(db_url, capsys):
    main(["--db", db_url, "generate", "--start", "2025-03-10", "--end", "2025-03-10", "--dry-run"])
    assert "Assigned 11 shifts" in capsys.readouterr().out

    main(["--db", db_url, "delete", "--start", "2025-03-10", "--end", "2025-03-16"])
    assert "[OK] Deleted 0 schedule entries" in capsys.readouterr().out


def test_bad_range_reports_error(db_url, capsys):
    with pytest.raises(ValueError):
        main(["--db", db_url, "generate", "--start", "2025-03-16", "--end", "2025-03-10"])
    assert "[ERROR] Generation failed" in capsys.readouterr().out


def test_config_file_is_used(db_url, tmp_path, capsys):
    config = tmp_path / "roster.yaml"
    config.write_text("staffing_targets:\n  Caregiver: {min: 1, max: 1}\n  Assistant: {min: 0, max: 0}\n")
    main(["--db", db_url, "generate", "--start", "2025-03-10", "--end", "2025-03-10", "--config", str(config)])
    assert "Assigned 1 shifts" in capsys.readouterr().out
