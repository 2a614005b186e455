"""Optimistic synchronization of one resource collection with the API."""

import logging
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass, field, replace
from typing import ClassVar, Generic, TypeVar

from mpl_site.adapters.mpl_api_client import MplApiClient
from mpl_site.errors import (
    AuthError,
    OperationInProgressError,
    SiteError,
    ValidationError,
)
from mpl_site.services.fallbacks import FallbackPolicy
from mpl_site.services.notifications import Notifier
from mpl_site.services.session import Session

RecordT = TypeVar("RecordT")

DeleteCall = Callable[[str, str], Awaitable[None]]

_logger = logging.getLogger(__name__)


@dataclass
class ResourceClient(ABC, Generic[RecordT]):
    """Mirror of one server collection with guarded, token-attached writes.

    ``items`` is replaced wholesale by a successful fetch and mutated locally
    by writes. Every fetch and every local mutation bumps a version counter;
    a fetch response is applied only if the version is unchanged since the
    fetch was issued, so an older response never overwrites newer state.

    Subclasses supply ``_fetch`` for their endpoint.
    """

    resource_name: ClassVar[str] = "resource"
    load_failed_message: ClassVar[str] = "Failed to load data"

    api_client: MplApiClient
    session: Session
    fallback_policy: FallbackPolicy
    notifier: Notifier
    items: list[RecordT] = field(default_factory=list, init=False)
    pending: set[str] = field(default_factory=set, init=False)
    _version: int = field(default=0, init=False, repr=False)

    async def fetch_all(self) -> list[RecordT]:
        """Reload the collection from the server."""
        self._version += 1
        issued = self._version
        try:
            records = await self._fetch()
        except SiteError as exc:
            if issued != self._version:
                return self.items
            return self._load_failed(exc)
        if issued != self._version:
            _logger.info("Discarding stale %s response", self.resource_name)
            return self.items
        self.items = self.sort_records(records)
        return self.items

    def get(self, record_id: str) -> RecordT | None:
        for record in self.items:
            if self.record_id(record) == record_id:
                return record
        return None

    def is_busy(self, operation: str) -> bool:
        """Whether the control triggering ``operation`` should be disabled."""
        return operation in self.pending

    def record_id(self, record: RecordT) -> str:
        return str(getattr(record, "id"))

    def sort_records(self, records: list[RecordT]) -> list[RecordT]:
        """Order records for display; server order unless overridden."""
        return list(records)

    @abstractmethod
    async def _fetch(self) -> list[RecordT]:
        """Return the collection as the server currently has it."""

    def _load_failed(self, exc: SiteError) -> list[RecordT]:
        defaults = self.fallback_policy.defaults_for(self.resource_name)
        if defaults is None:
            _logger.warning("Loading %s failed: %s", self.resource_name, exc.message)
            self.notifier.error(self.load_failed_message)
            return self.items
        _logger.warning(
            "Loading %s failed, using defaults: %s", self.resource_name, exc.message
        )
        self.items = defaults
        return self.items

    @asynccontextmanager
    async def _writing(self, operation: str) -> AsyncIterator[str]:
        """Guard a write: one at a time per operation, token attached.

        A server rejection of the token ends the session before the error
        propagates.
        """
        if operation in self.pending:
            raise OperationInProgressError(operation)
        token = self.session.require_token()
        self.pending.add(operation)
        try:
            yield token
        except AuthError as exc:
            self.session.invalidate(exc.message)
            raise
        finally:
            self.pending.discard(operation)

    def _touch(self) -> None:
        self._version += 1

    def _append(self, record: RecordT) -> None:
        self._touch()
        self.items = [*self.items, record]

    def _swap(self, record_id: str, record: RecordT) -> None:
        self._touch()
        self.items = [
            record if self.record_id(item) == record_id else item
            for item in self.items
        ]

    def _index_of(self, record_id: str) -> int:
        for index, record in enumerate(self.items):
            if self.record_id(record) == record_id:
                return index
        raise ValidationError(f"Unknown {self.resource_name} entry: {record_id}")

    async def _remove(
        self, record_id: str, operation: str, delete: DeleteCall
    ) -> None:
        """Remove optimistically, restoring the record if the server refuses.

        ``delete`` is the API call, invoked with the token and the record id.
        """
        async with self._writing(f"{operation}:{record_id}") as token:
            index = self._index_of(record_id)
            removed = self.items[index]
            self._touch()
            self.items = [*self.items[:index], *self.items[index + 1 :]]
            try:
                await delete(token, record_id)
            except SiteError:
                if self.get(record_id) is None:
                    self._touch()
                    position = min(index, len(self.items))
                    self.items = [
                        *self.items[:position],
                        removed,
                        *self.items[position:],
                    ]
                raise


@dataclass
class EditableResourceClient(ResourceClient[RecordT]):
    """Resource whose records are edited locally and saved by ``commit``.

    The first local change to a record remembers the record as it was
    (None for records added locally), so edits can be reverted without
    asking the server.
    """

    _originals: dict[str, RecordT | None] = field(
        default_factory=dict, init=False, repr=False
    )

    @property
    def has_unsaved_changes(self) -> bool:
        return bool(self._originals)

    @property
    def _dirty(self) -> set[str]:
        return set(self._originals)

    def update(self, record_id: str, **changes: object) -> RecordT:
        """Apply a patch to the local record immediately."""
        self.session.require_token()
        record = self.items[self._index_of(record_id)]
        patched = replace(record, **changes)
        self._track(record_id, record)
        self._swap(record_id, patched)
        return patched

    async def commit(self) -> list[RecordT]:
        """Send the edited state; on failure revert local edits and resync."""
        self._validate_commit()
        async with self._writing("commit") as token:
            snapshot = list(self.items)
            try:
                await self._push_changes(token, snapshot, self._dirty)
            except SiteError:
                self._revert_local_edits()
                await self.fetch_all()
                raise
            self._originals.clear()
        return await self._after_commit()

    async def discard_changes(self) -> list[RecordT]:
        """Throw away local edits and reload from the server."""
        self._revert_local_edits()
        return await self.fetch_all()

    def _track(self, record_id: str, original: RecordT | None) -> None:
        self._originals.setdefault(record_id, original)

    def _untrack(self, record_id: str) -> None:
        self._originals.pop(record_id, None)

    def _revert_local_edits(self) -> None:
        """Put every locally changed record back the way the server sent it."""
        if not self._originals:
            return
        restored = list(self.items)
        for record_id, original in self._originals.items():
            index = next(
                (
                    position
                    for position, record in enumerate(restored)
                    if self.record_id(record) == record_id
                ),
                None,
            )
            if index is None:
                if original is not None:
                    restored.append(original)
            elif original is None:
                del restored[index]
            else:
                restored[index] = original
        self._originals.clear()
        self._touch()
        self.items = self.sort_records(restored)
        _logger.info("Reverted local %s edits", self.resource_name)

    def _validate_commit(self) -> None:
        """Hook for checks that must pass before anything is sent."""

    @abstractmethod
    async def _push_changes(
        self, token: str, snapshot: list[RecordT], dirty: set[str]
    ) -> None:
        """Send the locally edited state to the server."""

    async def _after_commit(self) -> list[RecordT]:
        return self.items
