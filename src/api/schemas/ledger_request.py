"""Request schemas for Ledger API

Pydantic models for validating incoming HTTP requests.
"""

from typing import Any, Dict
from pydantic import BaseModel, Field, field_validator


class CreateRecordRequestSchema(BaseModel):
    """
    Request schema for creating a ledger record

    Used for POST /ledger/{module_id}/{tab_id}/records endpoint.
    """

    fields: Dict[str, Any] = Field(
        ...,
        description="Base field values keyed by stored (camelCase) or attribute name"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "fields": {
                    "date": "2024-01-20",
                    "counterpartyName": "Ruby Traders",
                    "description": "Blue sapphire lot 14",
                    "currency": "USD",
                    "baseAmount": "1000",
                    "paidAmount": "500",
                    "exchangeRate": "300",
                    "percent": "10",
                    "dueDate": "2024-02-15",
                }
            }
        }


class UpdateRecordRequestSchema(BaseModel):
    """
    Request schema for editing a ledger record

    Used for PATCH /ledger/{module_id}/{tab_id}/records/{record_id} endpoint.
    """

    changes: Dict[str, Any] = Field(
        ...,
        description="Base field values to change (derived fields are ignored)"
    )

    @field_validator("changes")
    @classmethod
    def validate_changes(cls, v):
        """At least one field must be edited"""
        if not v:
            raise ValueError("changes must not be empty")
        return v

    class Config:
        json_schema_extra = {
            "example": {
                "changes": {"paidAmount": "1000"}
            }
        }
