"""Shared utilities: datetime and generators."""

from selecta.shared.utils.datetime import (
    ensure_utc,
    parse_iso,
    to_epoch_ms,
    to_iso_z,
    utc_now,
    utc_now_ms,
)
from selecta.shared.utils.generators import (
    current_millis,
    generate_reference_id,
    generate_upload_name,
)

__all__ = [
    "current_millis",
    "ensure_utc",
    "generate_reference_id",
    "generate_upload_name",
    "parse_iso",
    "to_epoch_ms",
    "to_iso_z",
    "utc_now",
    "utc_now_ms",
]
