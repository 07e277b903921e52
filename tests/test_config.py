import json

import pytest

from roster.config import SchedulerConfig, StaffingTarget, load_config


def test_defaults():
    cfg = load_config()
    assert cfg.target_for("Caregiver", "min") == 7
    assert cfg.target_for("Caregiver", "max") == 8
    assert cfg.target_for("Assistant", "min") == 2
    assert cfg.target_for("Assistant", "max") == 3
    assert cfg.max_consecutive_days == 4
    assert cfg.lookback_days == 7
    assert cfg.am_shift_preference == ["6A6P", "6A2P", "2P10P"]


def test_target_for_unknown_role_and_kind():
    cfg = SchedulerConfig()
    assert cfg.target_for("Supervisor", "min") == 0
    with pytest.raises(ValueError):
        cfg.target_for("Caregiver", "median")


def test_load_yaml_merges_over_defaults(tmp_path):
    path = tmp_path / "roster.yaml"
    path.write_text(
        """
staffing_targets:
  Caregiver: {min: 5, max: 6}
  Assistant: {min: 1, max: 2}
max_consecutive_days: 5
log_level: debug
"""
    )
    cfg = load_config(path)
    assert cfg.staffing_targets["Caregiver"] == StaffingTarget(min=5, max=6)
    assert cfg.max_consecutive_days == 5
    assert cfg.log_level == "DEBUG"
    assert cfg.lookback_days == 7


def test_load_json(tmp_path):
    path = tmp_path / "roster.json"
    path.write_text(json.dumps({"lookback_days": 14, "am_shift_preference": ["6A2P"]}))
    cfg = load_config(str(path))
    assert cfg.lookback_days == 14
    assert cfg.am_shift_preference == ["6A2P"]
    assert cfg.target_for("Caregiver", "max") == 8


def test_empty_yaml_gives_defaults(tmp_path):
    path = tmp_path / "empty.yml"
    path.write_text("")
    assert load_config(path) == SchedulerConfig()


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


@pytest.mark.parametrize(
    "body",
    [
        "staffing_targets:\n  Caregiver: {min: 9, max: 8}\n",
        "staffing_targets:\n  Supervisor: {min: 1, max: 1}\n",
        "am_shift_preference: [6A6P, 9A5P]\n",
        "max_consecutive_days: 0\n",
        "- just\n- a list\n",
    ],
)
def test_invalid_settings(tmp_path, body):
    path = tmp_path / "bad.yaml"
    path.write_text(body)
    with pytest.raises(ValueError):
        load_config(path)


def test_unsupported_suffix(tmp_path):
    path = tmp_path / "roster.toml"
    path.write_text("max_consecutive_days = 4\n")
    with pytest.raises(ValueError, match="Unsupported"):
        load_config(path)
