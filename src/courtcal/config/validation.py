"""Configuration validation for courtcal."""

from __future__ import annotations

from dataclasses import dataclass

from courtcal.config.models import CourtCalConfig
from courtcal.models import EventSource, EventStatus

GROUP_BY_CHOICES = ("flat", "court")


@dataclass(frozen=True)
class ValidationError:
    """A configuration validation error."""

    path: str
    message: str


class ConfigValidator:
    """Validate CourtCalConfig dataclass against schema."""

    def validate(self, config: CourtCalConfig) -> list[ValidationError]:
        """Validate config, return list of errors (empty if valid)."""
        errors: list[ValidationError] = []

        valid_sources = {s.value for s in EventSource}
        expected_sources = ", ".join(sorted(valid_sources))
        for i, source in enumerate(config.filters.sources):
            if source not in valid_sources:
                errors.append(
                    ValidationError(
                        f"filters.sources[{i}]",
                        f"Unknown source {source!r} (expected one of {expected_sources})",
                    )
                )

        valid_statuses = {s.value for s in EventStatus}
        expected_statuses = ", ".join(sorted(valid_statuses))
        for i, status in enumerate(config.filters.statuses):
            if status not in valid_statuses:
                errors.append(
                    ValidationError(
                        f"filters.statuses[{i}]",
                        f"Unknown status {status!r} (expected one of {expected_statuses})",
                    )
                )

        for i, court_id in enumerate(config.filters.court_ids):
            if not isinstance(court_id, str) or not court_id:
                errors.append(
                    ValidationError(
                        f"filters.court_ids[{i}]", f"Court id {court_id!r} is not a string"
                    )
                )

        for code, uuid in config.locations.items():
            if not isinstance(uuid, str) or not uuid:
                errors.append(
                    ValidationError(f"locations.{code}", f"Location id {uuid!r} is not a string")
                )

        if config.locations and config.location.upper() not in config.locations:
            errors.append(
                ValidationError(
                    "general.location",
                    f"Location {config.location!r} missing from [locations]",
                )
            )

        if not _is_positive_int(config.conflicts.max_days):
            errors.append(
                ValidationError(
                    "conflicts.max_days",
                    f"Invalid max_days: {config.conflicts.max_days!r} "
                    "(expected a positive integer)",
                )
            )
        if not _is_positive_int(config.conflicts.days):
            errors.append(
                ValidationError(
                    "conflicts.days",
                    f"Invalid days: {config.conflicts.days!r} (expected a positive integer)",
                )
            )
        elif (
            _is_positive_int(config.conflicts.max_days)
            and config.conflicts.days > config.conflicts.max_days
        ):
            errors.append(
                ValidationError(
                    "conflicts.days",
                    f"days ({config.conflicts.days}) exceeds "
                    f"max_days ({config.conflicts.max_days})",
                )
            )

        if config.stdout.group_by not in GROUP_BY_CHOICES:
            errors.append(
                ValidationError(
                    "exporters.stdout.group_by",
                    f"Invalid group_by: {config.stdout.group_by!r} (expected flat or court)",
                )
            )

        return errors


def _is_positive_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0
