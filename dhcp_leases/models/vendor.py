from pydantic import BaseModel, Field


class VendorEntry(BaseModel):
    prefix: str = Field(..., pattern=r"^[0-9a-f]{2}:[0-9a-f]{2}:[0-9a-f]{2}$")
    organization: str
