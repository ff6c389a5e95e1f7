"""Environment configuration tests."""

from __future__ import annotations

import pytest

from settings import Settings, load_settings


def test_defaults_when_environment_is_empty() -> None:
    assert load_settings({}) == Settings()


def test_values_are_read_from_environment() -> None:
    settings = load_settings(
        {
            "TILEBOARD_DEFAULT_HEIGHT": "6",
            "TILEBOARD_DEFAULT_WIDTH": " 3 ",
            "TILEBOARD_SETTLE_DELAY": "0",
            "TILEBOARD_RATE_LIMIT": "5/second",
            "TILEBOARD_LOG_LEVEL": "debug",
        }
    )
    assert settings == Settings(
        default_height=6,
        default_width=3,
        settle_delay=0.0,
        rate_limit="5/second",
        log_level="DEBUG",
    )


def test_malformed_number_names_the_variable() -> None:
    with pytest.raises(ValueError, match="TILEBOARD_DEFAULT_WIDTH"):
        load_settings({"TILEBOARD_DEFAULT_WIDTH": "wide"})


@pytest.mark.parametrize(
    "env",
    [
        {"TILEBOARD_DEFAULT_HEIGHT": "0"},
        {"TILEBOARD_DEFAULT_WIDTH": "-2"},
        {"TILEBOARD_SETTLE_DELAY": "-0.1"},
    ],
)
def test_out_of_range_values_are_rejected(env) -> None:
    with pytest.raises(ValueError):
        load_settings(env)
