"""Partition Blob Entity

Row of the SQL-backed key-value store: one serialized partition per key.
"""

from datetime import datetime
from sqlmodel import Field, Column
from sqlalchemy import String, Text
from src.domain.base import BaseModel


class PartitionBlob(BaseModel, table=True):
    """
    Partition Blob - opaque serialized value stored under a string key

    Domain Rules:
    - key is unique (one value per storage key)
    - value is replaced wholesale on every write
    """

    __tablename__ = "partition_blobs"

    key: str = Field(
        sa_column=Column(String(255), primary_key=True),
        description="Storage key (e.g. unified_payment_ledger_outstanding_Payment_Received)"
    )

    value: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Serialized partition contents"
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Last write timestamp"
    )
