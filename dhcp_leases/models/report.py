from typing import Dict, List

from pydantic import BaseModel, Field

from dhcp_leases.models.lease import LeaseState


class ReportRow(BaseModel):
    ip: str
    mac: str = ""
    count: int = Field(..., ge=1)
    hostname: str = ""
    state: LeaseState
    end_time: str = ""
    cltt_time: str = ""
    organization: str


class Report(BaseModel):
    rows: List[ReportRow] = Field(default_factory=list)
    summary: Dict[LeaseState, int] = Field(default_factory=dict)

    @property
    def total(self) -> int:
        return len(self.rows)
