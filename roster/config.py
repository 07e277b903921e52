"""Load and validate scheduler configuration (YAML or JSON)."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

import yaml

from roster.engine.shifts import AM_SHIFTS_PREFERENCE, ASSISTANT, CAREGIVER, SCHEDULED_ROLES, SHIFTS_BY_CODE


@dataclass
class StaffingTarget:
    min: int
    max: int


def _default_targets() -> Dict[str, StaffingTarget]:
    return {
        CAREGIVER: StaffingTarget(min=7, max=8),
        ASSISTANT: StaffingTarget(min=2, max=3),
    }


@dataclass
class SchedulerConfig:
    staffing_targets: Dict[str, StaffingTarget] = field(default_factory=_default_targets)
    max_consecutive_days: int = 4
    lookback_days: int = 7
    am_shift_preference: List[str] = field(default_factory=lambda: list(AM_SHIFTS_PREFERENCE))
    db_url: str = "sqlite:///roster.db"
    log_level: str = "INFO"

    def target_for(self, role: str, kind: str) -> int:
        """Resolve a ``min``/``max`` staffing target for ``role``."""
        if kind not in ("min", "max"):
            raise ValueError(f"Unknown target kind: {kind}")
        target = self.staffing_targets.get(role)
        if target is None:
            return 0
        return getattr(target, kind)

    def validate(self) -> None:
        for role, target in self.staffing_targets.items():
            if role not in SCHEDULED_ROLES:
                raise ValueError(f"Staffing target for unschedulable role: {role}")
            if target.min < 0 or target.max < 0:
                raise ValueError(f"Staffing target for {role} must be non-negative")
            if target.min > target.max:
                raise ValueError(f"Staffing target for {role}: min {target.min} > max {target.max}")
        if self.max_consecutive_days < 1:
            raise ValueError("max_consecutive_days must be at least 1")
        if self.lookback_days < 0:
            raise ValueError("lookback_days must be non-negative")
        unknown = [code for code in self.am_shift_preference if code not in SHIFTS_BY_CODE]
        if unknown:
            raise ValueError(f"Unknown shift codes in am_shift_preference: {unknown}")


def _read_raw(path: Path) -> Dict[str, Any]:
    text = path.read_text()
    suffix = path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = yaml.safe_load(text)
    elif suffix == ".json":
        data = json.loads(text)
    else:
        raise ValueError(f"Unsupported config format: {path.suffix} (use .yaml, .yml or .json)")
    return data or {}


def load_config(path: str | Path | None = None) -> SchedulerConfig:
    """
    Load configuration from a YAML or JSON file.

    Keys missing from the file keep their defaults. Passing ``None`` returns
    the default configuration.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file contains invalid settings
    """
    cfg = SchedulerConfig()
    if path is None:
        return cfg

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    raw = _read_raw(path)
    if not isinstance(raw, dict):
        raise ValueError(f"Config root must be a mapping: {path}")

    targets = raw.get("staffing_targets")
    if targets is not None:
        cfg.staffing_targets = {
            role: StaffingTarget(min=int(values["min"]), max=int(values["max"]))
            for role, values in targets.items()
        }
    for key in ("max_consecutive_days", "lookback_days"):
        if key in raw:
            setattr(cfg, key, int(raw[key]))
    if "am_shift_preference" in raw:
        cfg.am_shift_preference = [str(code) for code in raw["am_shift_preference"]]
    if "db_url" in raw:
        cfg.db_url = str(raw["db_url"])
    if "log_level" in raw:
        cfg.log_level = str(raw["log_level"]).upper()

    cfg.validate()
    return cfg
