"""QueryRecords Use Case

Lists the records visible from a view, filtered and newest first.
"""

from typing import Sequence
from src.libs.result import Result, Return, Error
from src.app.services.record_collection import RecordCollection
from src.domain.record_query import DEFAULT_SEARCH_FIELDS, RecordQuery, apply_query
from .dtos import ListRecordsResponseDTO


class QueryRecords:
    """
    Use Case: Search, filter and sort a view

    Read-only. In a mother view the result spans every sibling partition.
    """

    def __init__(
        self,
        collection: RecordCollection,
        search_fields: Sequence[str] = DEFAULT_SEARCH_FIELDS,
    ):
        self.collection = collection
        self.search_fields = search_fields

    async def execute(self, query: RecordQuery) -> Result[ListRecordsResponseDTO]:
        try:
            await self.collection.refresh()
            records = apply_query(self.collection.records, query, self.search_fields)

            return Return.ok(ListRecordsResponseDTO(records=records, total=len(records)))

        except Exception as e:
            return Return.err(
                Error(
                    code="QUERY_RECORDS_FAILED",
                    message="Failed to query records",
                    reason=str(e),
                )
            )
