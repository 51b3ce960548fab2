"""Value generators: millisecond stamps, upload names and reference IDs."""

import os

from selecta.core.constants import REFERENCE_ID_PREFIX
from selecta.shared.utils.datetime import to_epoch_ms, utc_now


def current_millis() -> int:
    """Return the current Unix time in milliseconds."""
    return to_epoch_ms(utc_now())


def generate_upload_name(original_name: str, prefix: str, millis: int | None = None) -> str:
    """Build {prefix}_{millis}{ext} keeping the original extension (with its dot, or empty).

    Only the basename of original_name is used, so client-supplied paths
    never leak into the generated name.
    """
    base = os.path.basename(original_name.replace("\\", "/"))
    _, ext = os.path.splitext(base)
    stamp = current_millis() if millis is None else millis
    return f"{prefix}_{stamp}{ext}"


def generate_reference_id() -> str:
    """Display-only reference for a successful submission (NSF-{millis}). Not persisted or unique."""
    return f"{REFERENCE_ID_PREFIX}-{current_millis()}"
