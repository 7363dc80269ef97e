from datetime import datetime, timezone


def utcnow() -> datetime:
    """Timezone-aware UTC now; used for created_at/updated_at defaults."""
    return datetime.now(timezone.utc)
