"""
Unit tests for build_scheduling_config.
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from autoscheduler.core.config import Settings
from autoscheduler.core.exceptions import ConfigurationError, ValidationError
from autoscheduler.models.schedule import Schedule, SchedulingConfig
from autoscheduler.services.scheduling_config import build_scheduling_config


def make_settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


def test_defaults_without_schedule():
    config = build_scheduling_config(None, settings=make_settings())

    assert config.working_hours_start == 9
    assert config.working_hours_end == 22
    assert config.block_duration_minutes == 60
    assert config.gap_between_blocks_minutes == 5
    assert config.slot_granularity_minutes == 15
    assert config.non_working_weekdays == frozenset()
    assert config.timezone == "UTC"


def test_schedule_window_and_requested_block():
    schedule = Schedule(working_hours_start=8, working_hours_end=18)

    config = build_scheduling_config(schedule, 45, settings=make_settings())

    assert (config.working_hours_start, config.working_hours_end) == (8, 18)
    assert config.block_duration_minutes == 45


def test_settings_provide_fallback_window():
    settings = make_settings(DEFAULT_WORKING_HOURS_START=10, DEFAULT_WORKING_HOURS_END=16)

    config = build_scheduling_config(None, settings=settings)

    assert (config.working_hours_start, config.working_hours_end) == (10, 16)


def test_empty_window_is_rejected():
    settings = make_settings(DEFAULT_WORKING_HOURS_START=12, DEFAULT_WORKING_HOURS_END=12)

    with pytest.raises(ConfigurationError) as exc_info:
        build_scheduling_config(None, settings=settings)

    assert exc_info.value.details == {"working_hours_start": 12, "working_hours_end": 12}


@pytest.mark.parametrize("block_minutes", [0, -30])
def test_non_positive_block_is_rejected(block_minutes):
    with pytest.raises(ConfigurationError):
        build_scheduling_config(None, block_minutes, settings=make_settings())


def test_configuration_error_is_validation_error():
    with pytest.raises(ValidationError):
        build_scheduling_config(None, 0, settings=make_settings())


def test_skip_weekends_adds_saturday_and_sunday():
    config = build_scheduling_config(
        None,
        settings=make_settings(NON_WORKING_WEEKDAYS=[2]),
        skip_weekends=True,
    )

    assert config.non_working_weekdays == frozenset({2, 5, 6})
    assert not config.is_working_day(5)
    assert config.is_working_day(0)


def test_skip_weekends_from_settings():
    config = build_scheduling_config(None, settings=make_settings(SKIP_WEEKENDS=True))

    assert config.non_working_weekdays == frozenset({5, 6})


def test_gap_override():
    config = build_scheduling_config(None, settings=make_settings(), gap_between_blocks_minutes=0)

    assert config.gap_between_blocks_minutes == 0


def test_unknown_timezone_is_rejected():
    with pytest.raises(ConfigurationError):
        build_scheduling_config(None, settings=make_settings(), timezone="Mars/Olympus_Mons")


def test_every_weekday_non_working_is_rejected():
    settings = make_settings(NON_WORKING_WEEKDAYS=[0, 1, 2, 3, 4, 5, 6])

    with pytest.raises(ConfigurationError):
        build_scheduling_config(None, settings=settings)


def test_config_is_frozen():
    config = build_scheduling_config(None, settings=make_settings())

    with pytest.raises(PydanticValidationError):
        config.block_duration_minutes = 30


def test_slot_granularity_must_divide_an_hour():
    with pytest.raises(PydanticValidationError):
        SchedulingConfig(
            working_hours_start=9,
            working_hours_end=17,
            block_duration_minutes=60,
            gap_between_blocks_minutes=5,
            slot_granularity_minutes=7,
        )


def test_schedule_rejects_inverted_window():
    with pytest.raises(PydanticValidationError):
        Schedule(working_hours_start=18, working_hours_end=9)
