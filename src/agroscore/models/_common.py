# agroscore/models/_common.py
import uuid
from datetime import datetime, timezone


def now_dt() -> datetime:
    return datetime.now(tz=timezone.utc)


def new_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:12]}"
