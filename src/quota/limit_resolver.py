"""Resolution of effective usage limits.

Effective limits of a user are computed field by field: when the user has an
override for monthly (or daily) limit, the override is used, otherwise the
system-wide limit applies. System-wide limits are stored in key-value store
too; configured defaults are used until admin changes them.
"""

from typing import Optional

import constants
from kvstore.store import KeyValueStore
from log import get_logger
from models.usage import LimitOverride, ResolvedLimits, SystemLimits

logger = get_logger(__name__)


def limit_key(subject_id: str) -> str:
    """Construct key of limit override for given subject."""
    return f"{constants.LIMIT_KEY_PREFIX}{subject_id}"


class LimitResolver:
    """Computes effective limits by overlaying user overrides on system limits."""

    def __init__(
        self, store: KeyValueStore, defaults: Optional[SystemLimits] = None
    ) -> None:
        """Initialize limit resolver.

        Args:
            store: Key-value store with limits.
            defaults: Limits used when system limits were never stored.
        """
        self.store = store
        self.defaults = defaults if defaults is not None else SystemLimits()

    def system_limits(self) -> SystemLimits:
        """Retrieve system-wide limits, falling back to defaults."""
        value = self.store.get(constants.SYSTEM_LIMITS_KEY)
        if value is None:
            return self.defaults.model_copy()
        return SystemLimits.model_validate_json(value)

    def set_system_limits(self, monthly_limit: int, daily_limit: int) -> SystemLimits:
        """Replace system-wide limits."""
        limits = SystemLimits(monthly_limit=monthly_limit, daily_limit=daily_limit)
        self.store.put(constants.SYSTEM_LIMITS_KEY, limits.model_dump_json())
        logger.info(
            "System limits set to %d monthly and %d daily requests",
            monthly_limit,
            daily_limit,
        )
        return limits

    def override(self, subject_id: str) -> Optional[LimitOverride]:
        """Retrieve limit override for given subject, if any."""
        value = self.store.get(limit_key(subject_id))
        if value is None:
            return None
        return LimitOverride.model_validate_json(value)

    def update_override(
        self, subject_id: str, changes: LimitOverride
    ) -> Optional[LimitOverride]:
        """Update limit override for given subject.

        Only fields explicitly set in `changes` are applied, so it is possible
        to change monthly limit without touching daily one. A field explicitly
        set to None is removed from the override. When no field remains, the
        override is deleted altogether.

        Returns:
            The stored override, or None when it has been deleted.
        """
        current = self.override(subject_id) or LimitOverride()
        updated = current.model_copy(
            update=changes.model_dump(include=changes.model_fields_set)
        )

        if updated.is_empty():
            self.delete_override(subject_id)
            return None

        self.store.put(limit_key(subject_id), updated.model_dump_json())
        logger.info("Limit override for %s set to %s", subject_id, updated)
        return updated

    def delete_override(self, subject_id: str) -> bool:
        """Delete limit override for given subject."""
        return self.store.delete(limit_key(subject_id))

    def resolve(self, subject_id: str) -> ResolvedLimits:
        """Compute effective monthly and daily limits for given subject."""
        system_limits = self.system_limits()
        override = self.override(subject_id) or LimitOverride()

        return ResolvedLimits(
            monthly_limit=(
                override.monthly_limit
                if override.monthly_limit is not None
                else system_limits.monthly_limit
            ),
            daily_limit=(
                override.daily_limit
                if override.daily_limit is not None
                else system_limits.daily_limit
            ),
        )
