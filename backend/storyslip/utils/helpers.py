from datetime import datetime, timezone
from typing import Any, Dict, List

SNAPSHOT_FIELDS = ("title", "body", "excerpt")


def utc_now() -> datetime:
    # Columns store naive UTC.
    return datetime.now(timezone.utc).replace(tzinfo=None)


def snapshot_of(obj: Any) -> Dict[str, Any]:
    return {field: getattr(obj, field) for field in SNAPSHOT_FIELDS}


def changed_fields(left: Dict[str, Any], right: Dict[str, Any]) -> List[str]:
    return [field for field in SNAPSHOT_FIELDS if (left.get(field) or None) != (right.get(field) or None)]
