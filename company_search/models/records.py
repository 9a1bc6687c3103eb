"""
Company record model (one row of the business register table)
"""
from pydantic import BaseModel
from typing import Optional


class CompanyRecord(BaseModel):
    """A business register row. Owned by the store; this service only reads it."""

    id: int
    abn: Optional[str] = None
    entity_name: Optional[str] = None
    state: Optional[str] = None
    postcode: Optional[str] = None
    status: Optional[str] = None
    effective_from: Optional[str] = None
    entity_type: Optional[str] = None
    record_updated: Optional[str] = None
    created_at: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "id": 1042,
                "abn": "51824753556",
                "entity_name": "Harbour Lights Pty Ltd",
                "state": "NSW",
                "postcode": "2000",
                "status": "ACT",
                "effective_from": "20190312",
                "entity_type": "Australian Private Company",
                "record_updated": "20240105",
                "created_at": "2024-01-05T10:21:33+00:00"
            }
        }


# Columns that may be used as a sort key
RECORD_FIELDS = tuple(CompanyRecord.model_fields.keys())
