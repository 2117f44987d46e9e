from datetime import datetime, timezone

# Microsecond precision keeps updated_at / created_at strictly ordered for
# writes that land within the same second.
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


def utc_now() -> str:
    return datetime.now(timezone.utc).strftime(TIMESTAMP_FORMAT)
