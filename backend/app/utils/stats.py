from datetime import datetime
from typing import Optional

from app.crud.login_request import LoginRequestStore
from app.schemas.login import LoginStats


def start_of_today(now: Optional[datetime] = None) -> datetime:
    """Local midnight of the current calendar day."""
    now = now or datetime.now()
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


def compute_stats(store: LoginRequestStore, now: Optional[datetime] = None) -> LoginStats:
    # fresh scan on every call; volumes are human-paced
    requests = store.list_all()
    midnight = start_of_today(now)
    stats = LoginStats(total=len(requests))
    for r in requests:
        if r.status == "approved":
            stats.approved += 1
        elif r.status == "rejected":
            stats.rejected += 1
        else:
            stats.pending += 1
        if r.created_at >= midnight:
            stats.today += 1
    return stats
