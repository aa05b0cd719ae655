from datetime import datetime, timezone


def utc_now() -> str:
    """Fixed-width UTC timestamp; string order matches time order."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")
