"""
Scheduling configuration builder.

Derives the normalized SchedulingConfig for one run from the user's active
Schedule (or the configured fallback window) and the requested block size.
"""

from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import ValidationError as PydanticValidationError

from autoscheduler.core.config import Settings, get_settings
from autoscheduler.core.exceptions import ConfigurationError
from autoscheduler.core.logger import setup_logger
from autoscheduler.models.schedule import Schedule, SchedulingConfig

logger = setup_logger(__name__)

WEEKEND_WEEKDAYS = frozenset({5, 6})


def build_scheduling_config(
    schedule: Optional[Schedule],
    block_duration_minutes: Optional[int] = None,
    settings: Optional[Settings] = None,
    gap_between_blocks_minutes: Optional[int] = None,
    skip_weekends: Optional[bool] = None,
    timezone: Optional[str] = None,
) -> SchedulingConfig:
    """
    Build the configuration for a scheduling run.

    Args:
        schedule: Active working-hours schedule, or None to use the default window
        block_duration_minutes: Requested length of one placed block
        settings: Settings to read defaults from (None = cached app settings)
        gap_between_blocks_minutes: Override for the blocker/dependent gap
        skip_weekends: Override for the weekend policy
        timezone: IANA timezone the working hours are expressed in

    Returns:
        Immutable SchedulingConfig

    Raises:
        ConfigurationError: If the resulting configuration is malformed
    """
    settings = settings or get_settings()

    if schedule is None:
        start_hour = settings.DEFAULT_WORKING_HOURS_START
        end_hour = settings.DEFAULT_WORKING_HOURS_END
        logger.debug(f"No active schedule, using default window {start_hour}:00-{end_hour}:00")
    else:
        start_hour = schedule.working_hours_start
        end_hour = schedule.working_hours_end

    if start_hour >= end_hour:
        raise ConfigurationError(
            f"Working hours window is empty ({start_hour}:00-{end_hour}:00)",
            details={"working_hours_start": start_hour, "working_hours_end": end_hour},
        )

    block_minutes = (
        block_duration_minutes
        if block_duration_minutes is not None
        else settings.DEFAULT_BLOCK_DURATION_MINUTES
    )
    if block_minutes <= 0:
        raise ConfigurationError(
            f"Block duration must be positive, got {block_minutes}",
            details={"block_duration_minutes": block_minutes},
        )

    gap_minutes = (
        gap_between_blocks_minutes
        if gap_between_blocks_minutes is not None
        else settings.GAP_BETWEEN_BLOCKS_MINUTES
    )

    weekend_policy = settings.SKIP_WEEKENDS if skip_weekends is None else skip_weekends
    non_working = set(settings.NON_WORKING_WEEKDAYS)
    if weekend_policy:
        non_working |= WEEKEND_WEEKDAYS

    tz_name = timezone or settings.SCHEDULER_TIMEZONE
    try:
        ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigurationError(f"Unknown timezone: {tz_name}") from exc

    try:
        config = SchedulingConfig(
            working_hours_start=start_hour,
            working_hours_end=end_hour,
            block_duration_minutes=block_minutes,
            gap_between_blocks_minutes=gap_minutes,
            slot_granularity_minutes=settings.SLOT_GRANULARITY_MINUTES,
            non_working_weekdays=frozenset(non_working),
            timezone=tz_name,
            max_placement_iterations=settings.MAX_PLACEMENT_ITERATIONS,
        )
    except PydanticValidationError as exc:
        raise ConfigurationError("Invalid scheduling configuration", details=exc.errors()) from exc

    logger.debug(
        f"Scheduling config: {config.working_hours_start}:00-{config.working_hours_end}:00, "
        f"block={config.block_duration_minutes}min, gap={config.gap_between_blocks_minutes}min, "
        f"non_working={sorted(config.non_working_weekdays)}, tz={config.timezone}"
    )
    return config
