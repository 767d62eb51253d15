from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Callable, Optional

from loguru import logger

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import today_local
from ..contractors.model import Contractor
from ..contractors.repository import ContractorRepository
from ..core.exceptions import DeleteError, LoadError, NotFoundError, SaveError, StoreError
from ..helpers.model import Helper, HelperUpdate, NewHelper, apply_update
from ..helpers.repository import HelperRepository

# Store failures and rows that do not map to a model
_STORE_FAILURES = (StoreError, KeyError, TypeError, ValueError)


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of the cached collections at one point in time."""

    contractors: tuple[Contractor, ...]
    helpers: tuple[Helper, ...]
    attendance: tuple[AttendanceRecord, ...]


Subscriber = Callable[[Snapshot], None]


def _by_name(helpers: list[Helper]) -> list[Helper]:
    return sorted(helpers, key=lambda h: h.name.casefold())


class WorkforceData:
    """In-memory cache of contractors, helpers and attendance.

    This is the only writer of the three collections. Every mutation calls
    the store first and touches the cache only after the store confirmed the
    write, so a failed call never leaves the cache ahead of the store.
    Subscribers receive a fresh Snapshot after each change.
    """

    def __init__(
        self,
        contractors: ContractorRepository,
        helpers: HelperRepository,
        attendance: AttendanceRepository,
        *,
        attendance_lookback_days: int = 0,
        today: Callable[[], date] = today_local,
    ):
        self._contractor_repo = contractors
        self._helper_repo = helpers
        self._attendance_repo = attendance
        self._lookback_days = int(attendance_lookback_days or 0)
        self._today = today

        self._lock = threading.RLock()
        self._contractors: list[Contractor] = []
        self._helpers: list[Helper] = []
        self._attendance: list[AttendanceRecord] = []

        self._subscribers: dict[int, Subscriber] = {}
        self._next_token = 0

        self.loading = False
        self._failed: set[str] = set()
        self._error_message: Optional[str] = None

    # ----- reads -----

    @property
    def error(self) -> Optional[str]:
        """Page-level error; kept until every failed collection is fetched again."""
        with self._lock:
            return self._error_message if self._failed else None

    @property
    def failed_collections(self) -> tuple[str, ...]:
        with self._lock:
            return tuple(sorted(self._failed))

    def snapshot(self) -> Snapshot:
        with self._lock:
            return Snapshot(
                contractors=tuple(self._contractors),
                helpers=tuple(self._helpers),
                attendance=tuple(self._attendance),
            )

    @property
    def contractors(self) -> tuple[Contractor, ...]:
        return self.snapshot().contractors

    @property
    def helpers(self) -> tuple[Helper, ...]:
        return self.snapshot().helpers

    @property
    def attendance(self) -> tuple[AttendanceRecord, ...]:
        return self.snapshot().attendance

    def get_helper(self, helper_id: str) -> Optional[Helper]:
        with self._lock:
            return next((h for h in self._helpers if h.id == helper_id), None)

    def get_contractor(self, contractor_id: str) -> Optional[Contractor]:
        with self._lock:
            return next((c for c in self._contractors if c.id == contractor_id), None)

    def find_attendance(self, helper_id: str, day: date) -> Optional[AttendanceRecord]:
        with self._lock:
            return next((a for a in self._attendance if a.key == (helper_id, day)), None)

    # ----- subscriptions -----

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register ``callback``; the returned function unregisters it."""
        with self._lock:
            token = self._next_token
            self._next_token += 1
            self._subscribers[token] = callback

        def unsubscribe() -> None:
            with self._lock:
                self._subscribers.pop(token, None)

        return unsubscribe

    def _publish(self) -> None:
        with self._lock:
            snapshot = self.snapshot()
            tokens = list(self._subscribers)
        for token in tokens:
            with self._lock:
                callback = self._subscribers.get(token)
            # may have unsubscribed while an earlier callback ran
            if callback is None:
                continue
            try:
                callback(snapshot)
            except Exception:
                logger.exception("Data subscriber failed")

    # ----- loading -----

    def load(self) -> Snapshot:
        """Fetch all three collections.

        Collections that loaded stay loaded; if any fetch failed a single
        LoadError is raised afterwards with the failed collection names.
        """
        self.loading = True
        failed: list[str] = []
        try:
            for name, fetch in (
                ("companies", self.refetch_companies),
                ("helpers", self.refetch_helpers),
                ("attendance", self.refetch_attendance),
            ):
                try:
                    fetch()
                except LoadError:
                    failed.append(name)
        finally:
            self.loading = False

        if failed:
            with self._lock:
                self._error_message = "Failed to load data"
            logger.error(f"Error loading data, failed collections: {', '.join(failed)}")
            raise LoadError("Failed to load data", failed=failed)

        logger.info(
            f"Loaded {len(self._contractors)} contractors, {len(self._helpers)} helpers, "
            f"{len(self._attendance)} attendance records"
        )
        return self.snapshot()

    def refetch_companies(self) -> None:
        try:
            rows = list(self._contractor_repo.list_all())
        except _STORE_FAILURES as e:
            self._fetch_failed("companies", e)
        with self._lock:
            self._contractors = rows
            self._failed.discard("companies")
        self._publish()

    def refetch_helpers(self) -> None:
        try:
            rows = list(self._helper_repo.list_all())
        except _STORE_FAILURES as e:
            self._fetch_failed("helpers", e)
        with self._lock:
            self._helpers = _by_name(rows)
            self._failed.discard("helpers")
        self._publish()

    def refetch_attendance(self) -> None:
        since = None
        if self._lookback_days > 0:
            since = self._today() - timedelta(days=self._lookback_days)
        try:
            rows = list(self._attendance_repo.list_since(since))
        except _STORE_FAILURES as e:
            self._fetch_failed("attendance", e)
        with self._lock:
            self._attendance = sorted(rows, key=lambda a: a.date, reverse=True)
            self._failed.discard("attendance")
        self._publish()

    def refetch(self, collection: str) -> None:
        fetchers = {
            "companies": self.refetch_companies,
            "helpers": self.refetch_helpers,
            "attendance": self.refetch_attendance,
        }
        if collection not in fetchers:
            raise NotFoundError(f"Unknown collection: {collection}")
        fetchers[collection]()

    def _fetch_failed(self, collection: str, exc: Exception) -> None:
        message = f"Failed to fetch {collection}"
        logger.error(f"Error fetching {collection}: {exc}")
        with self._lock:
            self._failed.add(collection)
            self._error_message = message
        raise LoadError(message, failed=[collection]) from exc

    # ----- mutations -----

    def add_helper(self, new_helper: NewHelper) -> Helper:
        try:
            helper = self._helper_repo.insert(new_helper)
        except _STORE_FAILURES as e:
            logger.error(f"Error adding helper: {e}")
            raise SaveError("Failed to add helper") from e

        with self._lock:
            self._helpers = _by_name([*self._helpers, helper])
        logger.info(f"Added helper {helper.employee_id} ({helper.id})")
        self._publish()
        return helper

    def update_helper(self, helper_id: str, update: HelperUpdate) -> Helper:
        current = self.get_helper(helper_id)
        if current is None:
            raise NotFoundError("Helper not found")
        if update.is_empty():
            return current

        try:
            self._helper_repo.update(helper_id, update)
        except _STORE_FAILURES as e:
            logger.error(f"Error updating helper: {e}")
            raise SaveError("Failed to update helper") from e

        with self._lock:
            merged = current
            helpers = []
            for h in self._helpers:
                if h.id == helper_id:
                    merged = apply_update(h, update)
                    h = merged
                helpers.append(h)
            self._helpers = _by_name(helpers)
        logger.debug(f"Updated helper {helper_id}: {sorted(update.changes())}")
        self._publish()
        return merged

    def delete_helper(self, helper_id: str) -> None:
        """Hard delete. Attendance rows of the helper are kept for history."""
        try:
            self._helper_repo.delete(helper_id)
        except _STORE_FAILURES as e:
            logger.error(f"Error deleting helper: {e}")
            raise DeleteError("Failed to delete helper") from e

        with self._lock:
            self._helpers = [h for h in self._helpers if h.id != helper_id]
        logger.info(f"Deleted helper {helper_id}")
        self._publish()

    def upsert_attendance(self, record: AttendanceRecord) -> AttendanceRecord:
        try:
            saved = self._attendance_repo.upsert(record)
        except _STORE_FAILURES as e:
            logger.error(f"Error updating attendance: {e}")
            raise SaveError("Failed to update attendance") from e

        with self._lock:
            records = list(self._attendance)
            index = next((i for i, a in enumerate(records) if a.key == record.key), None)
            if index is None:
                records.insert(0, saved)
            else:
                records[index] = saved
            self._attendance = records
        logger.debug(f"Saved attendance {record.helper_id} {record.date.isoformat()} -> {saved.status.value}")
        self._publish()
        return saved

