import json
import logging

import pytest

from staffleave.config.system_settings import dump_system_settings, load_system_settings
from staffleave.core.exceptions import ConfigurationError, ErrorCode
from staffleave.schemas import SystemSettings


def test_defaults_without_file(monkeypatch):
    monkeypatch.setattr(
        "staffleave.config.system_settings.get_settings",
        lambda: type("S", (), {"SYSTEM_SETTINGS_FILE": None})(),
    )

    loaded = load_system_settings()

    assert loaded.request_window_start == 1
    assert loaded.request_window_end == 10
    assert not loaded.block_leaves_on_absence


def test_load_partial_document(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(
        json.dumps(
            {
                "request_window_end": 15,
                "global_swap_block_until": "2024-03-20",
                "block_leaves_on_absence": True,
                "limits": {
                    "temporary": {
                        "max_scale_leaves": 1,
                        "max_regular_swaps": 2,
                        "max_extra_swaps": 20,
                    }
                },
            }
        )
    )

    loaded = load_system_settings(path)

    assert loaded.request_window_end == 15
    assert loaded.global_swap_block_until.isoformat() == "2024-03-20"
    assert loaded.limits.temporary.max_extra_swaps == 20
    assert loaded.limits.statutory.max_extra_swaps == 10


def test_round_trip_through_file(tmp_path):
    path = tmp_path / "settings.json"
    original = SystemSettings(block_substitute_on_certificate=True, penalty_substitute_certificate_days=7)

    dump_system_settings(original, path)

    assert load_system_settings(path) == original


def test_missing_file_is_configuration_error(tmp_path):
    with pytest.raises(ConfigurationError) as exc:
        load_system_settings(tmp_path / "absent.json")

    assert exc.value.error_code is ErrorCode.INVALID_CONFIGURATION


@pytest.mark.parametrize(
    "content",
    ["{not json", json.dumps({"request_window_start": 12, "request_window_end": 3})],
)
def test_invalid_document_is_configuration_error(tmp_path, content):
    path = tmp_path / "settings.json"
    path.write_text(content)

    with pytest.raises(ConfigurationError):
        load_system_settings(path)


def test_load_is_logged_on_package_logger(tmp_path, caplog):
    path = tmp_path / "settings.json"
    path.write_text("{}")

    with caplog.at_level(logging.INFO, logger="staffleave"):
        load_system_settings(path)

    record = caplog.records[-1]
    assert record.name == "staffleave.config.system_settings"
    assert str(path) in record.getMessage()
