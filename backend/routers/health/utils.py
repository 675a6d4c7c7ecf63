import logging
import math
import os
import platform
import sys
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional

logger = logging.getLogger("health.utils")

# Taken when this module is first imported during app startup, not at exec time.
# uptime is measured from here.
PROCESS_STARTED = time.monotonic()

BYTES_PER_MB = 1024 * 1024


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2025-01-01T00:00:00.000Z"""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def uptime_seconds() -> float:
    return time.monotonic() - PROCESS_STARTED


def format_megabytes(num_bytes: int) -> str:
    # round half up, unlike the builtin round()
    return f"{math.floor(num_bytes / BYTES_PER_MB + 0.5)} MB"


def _statm_bytes(field: int) -> Optional[int]:
    # /proc/self/statm: size resident shared text lib data dt, in pages
    try:
        with open("/proc/self/statm", "r") as fh:
            pages = int(fh.read().split()[field])
        return pages * os.sysconf("SC_PAGE_SIZE")
    except (OSError, ValueError, IndexError):
        return None


def current_rss_bytes() -> Optional[int]:
    """Resident set size of this process right now, or None if /proc is not available."""
    return _statm_bytes(1)


def current_vms_bytes() -> Optional[int]:
    """Memory currently mapped by this process (virtual size), or None if /proc is not available."""
    return _statm_bytes(0)


def memory_usage() -> Optional[Dict[str, str]]:
    """Current resident memory as `used`, current mapped memory as `total`."""
    used = current_rss_bytes()
    total = current_vms_bytes()
    if used is None or total is None:
        logger.debug("Memory introspection unavailable on %s", sys.platform)
        return None
    return {"used": format_megabytes(used), "total": format_megabytes(total)}


def runtime_details() -> Dict[str, Any]:
    """Diagnostic block attached to the health payload when the feature flag is on.

    `memory` is left out when the platform gives no way to read it; the
    runtime fields are always present.
    """
    details: Dict[str, Any] = {}
    memory = memory_usage()
    if memory is not None:
        details["memory"] = memory
    details["runtimeVersion"] = platform.python_version()
    details["platform"] = sys.platform
    return details


def build_health_payload(include_details: bool) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "status": "healthy",
        "timestamp": utc_timestamp(),
        "uptime": uptime_seconds(),
    }
    if include_details:
        payload["details"] = runtime_details()
    return payload
