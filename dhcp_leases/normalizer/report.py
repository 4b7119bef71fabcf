from datetime import datetime
from typing import Dict, Optional

from dhcp_leases.models.lease import LeaseRecord
from dhcp_leases.models.report import Report, ReportRow
from dhcp_leases.storage.oui_db import VendorDirectory
from .base import BaseNormalizer
from .lease_state import classify_lease, summarize_states

OUTPUT_TIME_FORMAT = "%Y/%m/%d %H:%M:%S %z"


def format_time(value: Optional[datetime]) -> str:
    # В отчёте время всегда в локальной зоне
    if value is None:
        return ""
    return value.astimezone().strftime(OUTPUT_TIME_FORMAT)


class ReportNormalizer(BaseNormalizer):
    @classmethod
    def normalize(cls, leases: Dict[str, LeaseRecord], directory: VendorDirectory, now: datetime) -> Report:
        """
        Сортирует записи по IP (двоичный порядок), определяет состояние на один момент now
        и подставляет производителя из справочника OUI.
        """
        rows = []

        for lease in sorted(leases.values(), key=lambda l: l.sort_key):
            normalized = {
                "ip": lease.ip_key,
                "mac": lease.mac_address or "",
                "count": lease.count,
                "hostname": lease.hostname,
                "state": classify_lease(lease, now),
                "end_time": format_time(lease.end_time),
                "cltt_time": format_time(lease.cltt_time),
                "organization": directory.lookup(lease.oui_prefix),
            }

            rows.append(ReportRow(**normalized))

        return Report(rows=rows, summary=summarize_states(row.state for row in rows))
