from datetime import datetime, timezone
from typing import Dict, Iterable

from dhcp_leases.models.lease import LeaseRecord, LeaseState, ZERO_TIME

# Фиксированный порядок в итоговой строке отчёта
STATE_ORDER = (LeaseState.ABANDONED, LeaseState.FUTURE, LeaseState.CURRENT, LeaseState.PAST)


def classify_lease(lease: LeaseRecord, now: datetime) -> LeaseState:
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    if lease.abandoned:
        return LeaseState.ABANDONED

    start_time = lease.start_time or ZERO_TIME
    end_time = lease.end_time or ZERO_TIME

    if now < start_time:
        return LeaseState.FUTURE
    if start_time <= now <= end_time:
        return LeaseState.CURRENT
    return LeaseState.PAST


def summarize_states(states: Iterable[LeaseState]) -> Dict[LeaseState, int]:
    summary = {state: 0 for state in STATE_ORDER}
    for state in states:
        summary[state] += 1
    return summary
