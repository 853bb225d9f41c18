"""Item detail key state exports."""

from .record_detail import RecordDetailState

__all__ = ["RecordDetailState"]
