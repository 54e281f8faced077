from datetime import UTC, datetime


def utc_now() -> datetime:
    """Timestamp source for record creation and update times."""
    return datetime.now(UTC)
