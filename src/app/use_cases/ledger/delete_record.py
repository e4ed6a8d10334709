"""DeleteRecord Use Case

Hard-deletes a record from the partition that owns it.
"""

from src.libs.result import Result, Return, Error
from src.app.services.record_collection import RecordCollection
from src.app.services.unit_of_work import UnitOfWork
from src.domain.errors import RecordValidationError
from .dtos import DeleteRecordCommandDTO, DeleteRecordResponseDTO


class DeleteRecord:
    """
    Use Case: Delete a ledger record

    Business Rules:
    1. The record is removed from its owning partition only
    2. Deleting an unknown id is a no-op (deleted=False)
    3. A record tagged with a partition outside the view is not deleted
    """

    def __init__(self, uow: UnitOfWork, collection: RecordCollection):
        self.uow = uow
        self.collection = collection

    async def execute(self, command: DeleteRecordCommandDTO) -> Result[DeleteRecordResponseDTO]:
        try:
            await self.collection.refresh()
            record = self.collection.find(command.record_id)

            deleted = False
            if record:
                deleted = await self.collection.delete(
                    record.id, record.source_module, record.source_tab
                )
                await self.uow.commit()

            return Return.ok(
                DeleteRecordResponseDTO(record_id=command.record_id, deleted=deleted)
            )

        except RecordValidationError as e:
            return Return.err(
                Error(
                    code="VALIDATION_ERROR",
                    message=str(e),
                    reason=", ".join(e.fields),
                )
            )

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="DELETE_RECORD_FAILED",
                    message="Failed to delete record",
                    reason=str(e),
                )
            )
