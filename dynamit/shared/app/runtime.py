"""Runtime configuration for dynamit."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_REGION = "us-east-1"


@dataclass
class MockConfig:
    """Mock-related runtime configuration."""

    enabled: bool = False
    demo_rows: int = 250
    query_delay: float = 0.0


@dataclass
class RuntimeConfig:
    """Runtime configuration provided by CLI or tests."""

    region: str = DEFAULT_REGION
    profile: str | None = None
    endpoint_url: str | None = None
    page_size: int = 100
    tick_rate: float = 4.0
    frame_rate: float = 30.0
    queue_size: int = 32
    debug_mode: bool = False
    log_file: Path | None = None
    mock: MockConfig = field(default_factory=MockConfig)

    @classmethod
    def from_env(cls) -> RuntimeConfig:
        def _parse_int(value: str | None, default: int) -> int:
            if not value:
                return default
            try:
                parsed = int(value)
            except (TypeError, ValueError):
                return default
            return parsed if parsed > 0 else default

        def _parse_float(value: str | None, default: float) -> float:
            if not value:
                return default
            try:
                parsed = float(value)
            except (TypeError, ValueError):
                return default
            return parsed if parsed > 0 else default

        def _parse_bool(value: str | None, default: bool) -> bool:
            if value is None or not value.strip():
                return default
            return value.strip().lower() in {"1", "true", "yes", "on"}

        region = (
            os.environ.get("DYNAMIT_REGION", "").strip()
            or os.environ.get("AWS_REGION", "").strip()
            or os.environ.get("AWS_DEFAULT_REGION", "").strip()
            or DEFAULT_REGION
        )
        log_file = os.environ.get("DYNAMIT_LOG_FILE", "").strip() or None

        mock_config = MockConfig(
            enabled=_parse_bool(os.environ.get("DYNAMIT_MOCK"), False),
            demo_rows=_parse_int(os.environ.get("DYNAMIT_DEMO_ROWS"), 250),
            query_delay=_parse_float(os.environ.get("DYNAMIT_MOCK_QUERY_DELAY"), 0.0),
        )

        return cls(
            region=region,
            profile=os.environ.get("DYNAMIT_PROFILE", "").strip() or None,
            endpoint_url=os.environ.get("DYNAMIT_ENDPOINT_URL", "").strip() or None,
            page_size=_parse_int(os.environ.get("DYNAMIT_PAGE_SIZE"), 100),
            tick_rate=_parse_float(os.environ.get("DYNAMIT_TICK_RATE"), 4.0),
            frame_rate=_parse_float(os.environ.get("DYNAMIT_FRAME_RATE"), 30.0),
            queue_size=_parse_int(os.environ.get("DYNAMIT_QUEUE_SIZE"), 32),
            debug_mode=_parse_bool(os.environ.get("DYNAMIT_DEBUG"), False),
            log_file=Path(log_file).expanduser() if log_file else None,
            mock=mock_config,
        )
