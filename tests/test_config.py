import json

import pytest

from block_probe import DetectorSettings, InputPatternDetector, TickSystem, as_provider, load_settings


def test_as_provider_wraps_constants_and_passes_callables():
    assert as_provider(5)() == 5
    values = iter([1, 2])
    provider = as_provider(lambda: next(values))
    assert provider() == 1
    assert provider() == 2


def test_defaults():
    s = DetectorSettings()
    assert s.event_id == "djc:sneak_input_triggered"
    assert (s.input_window_ticks, s.trigger_count, s.cooldown_ticks, s.logging_timeout_ticks) == (5, 2, 20, 5)


def test_from_dict_merges_over_defaults():
    s = DetectorSettings.from_dict({"trigger_count": "3", "log_level": "debug"})
    assert s.trigger_count == 3
    assert s.log_level == "DEBUG"
    assert s.cooldown_ticks == 20


def test_from_dict_rejects_unknown_keys():
    with pytest.raises(KeyError, match="sneak_count"):
        DetectorSettings.from_dict({"sneak_count": 2})


def test_load_settings(tmp_path):
    path = tmp_path / "detector.json"
    path.write_text(json.dumps({"event_id": "test:pattern", "input_window_ticks": 8}), encoding="utf-8")
    s = load_settings(path)
    assert s.event_id == "test:pattern"
    assert s.input_window_ticks == 8

    det = InputPatternDetector(TickSystem(), **s.as_kwargs())
    assert det.event_id == "test:pattern"
    assert det.input_window_ticks == 8
    assert det.trigger_count == 2


def test_load_settings_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_settings(tmp_path / "missing.json")

    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError):
        load_settings(bad)

    listing = tmp_path / "list.json"
    listing.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_settings(listing)
