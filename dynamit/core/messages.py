"""Messages exchanged between the dispatcher and the explorer components.

Every user intent, background result and follow-up reaction is one of these
frozen dataclasses. Components receive each message in a fixed order and may
return further messages, which the dispatcher applies in the same pass.
"""

from __future__ import annotations

from dataclasses import dataclass

from dynamit.core.modes import Mode
from dynamit.domains.store.types import Cursor, KeySchema


class Message:
    """Base class for all dispatcher messages."""


# ---------------------------------------------------------------------------
# Loop control
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Tick(Message):
    pass


@dataclass(frozen=True)
class Quit(Message):
    pass


@dataclass(frozen=True)
class ShowHelp(Message):
    """Open the key binding overview."""


@dataclass(frozen=True)
class EnterMode(Message):
    mode: Mode


@dataclass(frozen=True)
class StartLoading(Message):
    message: str


@dataclass(frozen=True)
class StopLoading(Message):
    pass


@dataclass(frozen=True)
class RequestDropped(Message):
    """A fetch request was refused because the request queue was full."""

    kind: str


@dataclass(frozen=True)
class CopyToClipboard(Message):
    text: str


# ---------------------------------------------------------------------------
# Selection movement (shared by the collection, record and detail lists)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SelectNext(Message):
    pass


@dataclass(frozen=True)
class SelectPrevious(Message):
    pass


@dataclass(frozen=True)
class SelectFirst(Message):
    pass


@dataclass(frozen=True)
class SelectLast(Message):
    pass


@dataclass(frozen=True)
class ScrollUp(Message):
    pass


@dataclass(frozen=True)
class ScrollDown(Message):
    pass


# ---------------------------------------------------------------------------
# Text entry (filter inputs and the query form)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class InsertCharacter(Message):
    character: str


@dataclass(frozen=True)
class DeleteCharacter(Message):
    pass


@dataclass(frozen=True)
class CaretLeft(Message):
    pass


@dataclass(frozen=True)
class CaretRight(Message):
    pass


@dataclass(frozen=True)
class SubmitText(Message):
    pass


@dataclass(frozen=True)
class CancelText(Message):
    pass


# ---------------------------------------------------------------------------
# Collections
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FetchCollections(Message):
    pass


@dataclass(frozen=True)
class CollectionsLoaded(Message):
    names: tuple[str, ...]


@dataclass(frozen=True)
class CollectionFilterChanged(Message):
    text: str


@dataclass(frozen=True)
class ChooseCollection(Message):
    """Confirm the highlighted collection."""


@dataclass(frozen=True)
class CollectionSelected(Message):
    name: str


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FetchRecords(Message):
    collection: str


@dataclass(frozen=True)
class FetchMoreRecords(Message):
    collection: str
    cursor: Cursor


@dataclass(frozen=True)
class FetchKeySchema(Message):
    collection: str


@dataclass(frozen=True)
class RecordsLoaded(Message):
    records: tuple[str, ...]
    next_cursor: Cursor | None = None


@dataclass(frozen=True)
class MoreRecordsLoaded(Message):
    records: tuple[str, ...]
    next_cursor: Cursor | None = None


@dataclass(frozen=True)
class ApproximateCountLoaded(Message):
    count: int


@dataclass(frozen=True)
class KeySchemaLoaded(Message):
    schema: KeySchema


@dataclass(frozen=True)
class ClearRecordFilter(Message):
    pass


@dataclass(frozen=True)
class ToggleQueryFocus(Message):
    pass


@dataclass(frozen=True)
class QueryByKey(Message):
    collection: str
    partition_key: str
    partition_value: str
    sort_key: str | None = None
    sort_value: str | None = None


@dataclass(frozen=True)
class QueryResultsLoaded(Message):
    records: tuple[str, ...]


@dataclass(frozen=True)
class OpenRecord(Message):
    """Open the highlighted record in the detail view."""


@dataclass(frozen=True)
class RecordOpened(Message):
    record: str


@dataclass(frozen=True)
class CopyRecord(Message):
    pass


# ---------------------------------------------------------------------------
# Record detail
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ToggleNode(Message):
    pass


@dataclass(frozen=True)
class ExpandAll(Message):
    pass


@dataclass(frozen=True)
class CollapseAll(Message):
    pass


@dataclass(frozen=True)
class ScrollLeft(Message):
    pass


@dataclass(frozen=True)
class ScrollRight(Message):
    pass


@dataclass(frozen=True)
class CopyNodeValue(Message):
    pass


@dataclass(frozen=True)
class CloseDetail(Message):
    pass


@dataclass(frozen=True)
class Notify(Message):
    """A short user-facing notice (rendered by the UI collaborator)."""

    text: str
    severity: str = "information"
