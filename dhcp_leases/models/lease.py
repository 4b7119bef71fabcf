from datetime import datetime, timezone
from enum import Enum
from ipaddress import IPv4Address
from typing import Optional

from pydantic import BaseModel, Field, IPvAnyAddress, field_validator

# Нулевое время: так сравниваются отсутствующие starts/ends
ZERO_TIME = datetime.min.replace(tzinfo=timezone.utc)


class LeaseState(str, Enum):
    ABANDONED = "Abandoned"
    FUTURE = "Future"
    CURRENT = "Current"
    PAST = "Past"


class LeaseRecord(BaseModel):
    ip_address: IPvAnyAddress
    mac_address: Optional[str] = Field(None, pattern=r"^([0-9a-f]{2}:){5}[0-9a-f]{2}$")
    hostname: str = ""  # из client-hostname
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    cltt_time: Optional[datetime] = None  # client-last-transaction-time
    count: int = Field(1, ge=1)  # сколько блоков слито в эту запись
    abandoned: bool = False

    @field_validator("ip_address")
    @classmethod
    def fold_ipv4_mapped(cls, v):
        # ::ffff:10.0.0.5 и 10.0.0.5 считаются одним адресом
        return getattr(v, "ipv4_mapped", None) or v

    @property
    def ip_key(self) -> str:
        return str(self.ip_address)

    @property
    def oui_prefix(self) -> Optional[str]:
        if not self.mac_address:
            return None
        return self.mac_address[:8]

    @property
    def sort_key(self) -> bytes:
        """
        Ключ для сортировки по двоичному значению адреса.
        IPv4 приводится к виду ::ffff:a.b.c.d, чтобы IPv4 и IPv6 сравнивались в одном пространстве.
        """
        ip = self.ip_address
        if isinstance(ip, IPv4Address):
            return b"\x00" * 10 + b"\xff\xff" + ip.packed
        return ip.packed
