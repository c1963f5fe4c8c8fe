"""Detector settings, dynamic values and logging setup.

Thresholds may be plain numbers or zero-argument callables; both are turned
into providers that are evaluated on every read. Settings files are JSON
objects merged over the defaults.
"""
from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Callable, Dict, TypeVar, Union

T = TypeVar("T")
Provider = Callable[[], T]
DynamicValue = Union[T, Callable[[], T]]


def as_provider(value: DynamicValue) -> Provider:
    """Wrap a constant in a getter; callables pass through unchanged."""
    if callable(value):
        return value
    return lambda: value


@dataclass(frozen=True)
class DetectorSettings:
    event_id: str = "djc:sneak_input_triggered"
    input_window_ticks: int = 5
    trigger_count: int = 2
    cooldown_ticks: int = 20
    logging_timeout_ticks: int = 5
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DetectorSettings":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise KeyError(f"unknown settings keys: {', '.join(unknown)}")
        merged = {**asdict(cls()), **data}
        return cls(
            event_id=str(merged["event_id"]),
            input_window_ticks=int(merged["input_window_ticks"]),
            trigger_count=int(merged["trigger_count"]),
            cooldown_ticks=int(merged["cooldown_ticks"]),
            logging_timeout_ticks=int(merged["logging_timeout_ticks"]),
            log_level=str(merged["log_level"]).upper(),
        )

    def as_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for ``InputPatternDetector``."""
        data = asdict(self)
        data.pop("log_level")
        return data


def load_settings(path: Union[str, Path]) -> DetectorSettings:
    """Load detector settings from a JSON file, defaults filling missing keys."""
    cfg_path = Path(path)
    if not cfg_path.exists():
        raise FileNotFoundError(f"{cfg_path} not found")
    try:
        data = json.loads(cfg_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"failed to parse {cfg_path}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"{cfg_path} must contain a JSON object")
    return DetectorSettings.from_dict(data)


def configure_logging(log_level: str) -> None:
    """Configure root logger with a concise format."""
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )
