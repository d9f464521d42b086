"""Directory of users known to the service.

Users are added to the directory when they exchange identity token for the
first time, or when admin adds them manually. Every authenticated activity
refreshes the timestamp of last activity.

Users are looked up by e-mail address by scanning all records. It is
acceptable for hundreds of users, bigger deployments would need a secondary
index.
"""

from datetime import datetime
from typing import Optional

import constants
from directory.errors import DuplicateEmailError, UserNotFoundError
from kvstore.store import KeyValueStore
from log import get_logger
from models.usage import LimitOverride, UserRecord
from quota.limit_resolver import LimitResolver
from quota.quota_ledger import QuotaLedger
from utils.clock import utc_now
from utils.suid import get_suid

logger = get_logger(__name__)


def user_key(subject_id: str) -> str:
    """Construct key of user record for given subject."""
    return f"{constants.USER_KEY_PREFIX}{subject_id}"


def normalize_email(email: str) -> str:
    """Normalize e-mail address so it can be compared."""
    return email.strip().lower()


class UserDirectory:
    """Directory of users known to the service."""

    def __init__(
        self,
        store: KeyValueStore,
        limit_resolver: LimitResolver,
        quota_ledger: QuotaLedger,
    ) -> None:
        """Initialize user directory."""
        self.store = store
        self.limit_resolver = limit_resolver
        self.quota_ledger = quota_ledger

    def get(self, subject_id: str) -> Optional[UserRecord]:
        """Retrieve user record by subject ID."""
        value = self.store.get(user_key(subject_id))
        if value is None:
            return None
        return UserRecord.model_validate_json(value)

    def _save(self, record: UserRecord) -> None:
        self.store.put(user_key(record.subject_id), record.model_dump_json())

    def list(self) -> list[UserRecord]:
        """List all users in storage iteration order."""
        users = []
        for key in self.store.list_keys(constants.USER_KEY_PREFIX):
            value = self.store.get(key)
            # record might have been deleted in the meantime
            if value is not None:
                users.append(UserRecord.model_validate_json(value))
        return users

    def find_by_email(self, email: str) -> Optional[UserRecord]:
        """Find user by e-mail address, comparison is case-insensitive."""
        normalized = normalize_email(email)
        for user in self.list():
            if normalize_email(user.email) == normalized:
                return user
        return None

    def touch(
        self,
        subject_id: str,
        email: str,
        display_name: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> UserRecord:
        """Record activity of given user.

        The user record is created when it does not exist yet, otherwise the
        last activity timestamp is refreshed. E-mail and display name are
        updated when provided.

        When a user logs in for the first time and admin has already added
        user with the same e-mail, the manually added record is taken over by
        the real subject ID together with its limit override.
        """
        timestamp = (now or utc_now()).isoformat(timespec="seconds")

        record = self.get(subject_id)
        if record is not None:
            record.last_active = timestamp
            if email:
                record.email = email
            if display_name:
                record.display_name = display_name
            self._save(record)
            return record

        record = UserRecord(
            subject_id=subject_id,
            email=email,
            display_name=display_name,
            last_active=timestamp,
            manually_added=False,
        )
        provisioned = self.find_by_email(email) if email else None
        if provisioned is not None and provisioned.manually_added:
            self._adopt(provisioned, record)
        self._save(record)
        logger.info("New user %s (%s) added to directory", subject_id, email)
        return record

    def _adopt(self, provisioned: UserRecord, record: UserRecord) -> None:
        """Move manually added user under the subject ID of a real user."""
        logger.info(
            "User %s takes over manually added record %s",
            record.subject_id,
            provisioned.subject_id,
        )
        if record.display_name is None:
            record.display_name = provisioned.display_name
        override = self.limit_resolver.override(provisioned.subject_id)
        if override is not None:
            self.limit_resolver.update_override(record.subject_id, override)
        self._delete(provisioned.subject_id)

    def add(
        self,
        email: str,
        name: Optional[str] = None,
        monthly_limit: Optional[int] = None,
        daily_limit: Optional[int] = None,
    ) -> UserRecord:
        """Add user manually.

        Raises:
            DuplicateEmailError: If user with the same e-mail already exists.
        """
        email = email.strip()
        if self.find_by_email(email) is not None:
            logger.warning("User with e-mail %s already exists", email)
            raise DuplicateEmailError(email)

        record = UserRecord(
            subject_id=f"{constants.MANUAL_SUBJECT_PREFIX}{get_suid()}",
            email=email,
            display_name=name,
            last_active=constants.NEVER_ACTIVE,
            manually_added=True,
        )
        self._save(record)

        changes = {
            field: value
            for field, value in (
                ("monthly_limit", monthly_limit),
                ("daily_limit", daily_limit),
            )
            if value is not None
        }
        if changes:
            self.limit_resolver.update_override(
                record.subject_id, LimitOverride(**changes)
            )

        logger.info("User %s (%s) added manually", record.subject_id, email)
        return record

    def remove(self, email: str) -> UserRecord:
        """Remove user with given e-mail.

        User record, quota record and limit override are all deleted.

        Raises:
            UserNotFoundError: If there's no user with given e-mail.
        """
        record = self.find_by_email(email)
        if record is None:
            raise UserNotFoundError(email)
        self._delete(record.subject_id)
        logger.info("User %s (%s) removed", record.subject_id, record.email)
        return record

    def _delete(self, subject_id: str) -> None:
        self.store.delete(user_key(subject_id))
        self.quota_ledger.delete(subject_id)
        self.limit_resolver.delete_override(subject_id)
