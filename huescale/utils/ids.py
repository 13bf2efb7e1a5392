"""
Huescale ID Utilities
Generate identifiers for batch and transform runs.
"""
import uuid
from datetime import datetime, timezone


def generate_batch_id(prefix: str = "batch") -> str:
    """
    Generate a unique identifier for a batch run.

    Args:
        prefix: Short run type, e.g. "batch" or "transform"

    Returns:
        Identifier such as "batch-20250101120000-1a2b3c4d"
    """
    timestamp = datetime.now().strftime("%Y%m%d%H%M%S")
    short_uuid = str(uuid.uuid4())[:8]
    return f"{prefix}-{timestamp}-{short_uuid}"


def utc_timestamp() -> str:
    """Current time as an ISO 8601 UTC string."""
    return datetime.now(timezone.utc).isoformat()
