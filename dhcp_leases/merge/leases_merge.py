from typing import Dict, Iterable

from dhcp_leases.models.lease import LeaseRecord, ZERO_TIME


def merge_leases(observations: Iterable[LeaseRecord]) -> Dict[str, LeaseRecord]:
    """
    Merge по IP:
    - первая запись для IP вставляется как есть
    - count всегда суммируется по всем блокам файла
    - остаётся запись с самым поздним ends (строго позже), остальные поля старой записи отбрасываются
    - при равном ends остаётся ранее встреченная запись
    """
    leases: Dict[str, LeaseRecord] = {}

    for lease in observations:
        key = lease.ip_key
        existing = leases.get(key)

        if existing is None:
            leases[key] = lease
            continue

        total_count = existing.count + lease.count
        if (lease.end_time or ZERO_TIME) > (existing.end_time or ZERO_TIME):
            leases[key] = lease.model_copy(update={"count": total_count})
        else:
            leases[key] = existing.model_copy(update={"count": total_count})

    print(f"[MERGE] Уникальных IP: {len(leases)}")
    return leases
