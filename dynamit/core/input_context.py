"""UI-agnostic input context used for key state evaluation."""

from __future__ import annotations

from dataclasses import dataclass

from dynamit.core.modes import Mode


@dataclass
class InputContext:
    """Snapshot of explorer state for key routing/state evaluation."""

    mode: Mode
    loading: bool = False
    has_collections: bool = False
    has_selected_collection: bool = False
    has_records: bool = False
    has_record_selected: bool = False
    has_partition_key: bool = False
    has_sort_key: bool = False
    record_filter_active: bool = False
    fetch_in_flight: bool = False
    detail_has_rows: bool = False
