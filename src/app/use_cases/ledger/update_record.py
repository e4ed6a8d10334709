"""UpdateRecord Use Case

Applies a partial edit of base fields to an existing record and persists it
to the partition that owns it.
"""

import logging
from src.libs.result import Result, Return, Error
from src.app.services.clock import Clock
from src.app.services.record_collection import RecordCollection
from src.app.services.unit_of_work import UnitOfWork
from src.domain.derived_fields import DerivedFieldEngine
from src.domain.errors import RecordValidationError
from src.domain.ledger_record import LedgerRecord
from .dtos import UpdateRecordCommandDTO

logger = logging.getLogger(__name__)


class UpdateRecord:
    """
    Use Case: Edit a ledger record

    Business Rules:
    1. id and ownership tags never change
    2. Derived fields in the edit are ignored; all of them are recomputed
    3. The edited record must still carry its required fields
    4. An unknown id leaves every partition untouched

    Flow:
    1. Refresh the collection and find the record
    2. Merge the changes and recompute
    3. Validate required fields
    4. Save through the collection and commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        collection: RecordCollection,
        engine: DerivedFieldEngine,
        clock: Clock,
    ):
        self.uow = uow
        self.collection = collection
        self.engine = engine
        self.clock = clock

    async def execute(self, command: UpdateRecordCommandDTO) -> Result[LedgerRecord]:
        """
        Execute record update

        Args:
            command: UpdateRecordCommandDTO with record_id and changes

        Returns:
            Result[LedgerRecord]: The updated record or error
        """
        try:
            # Step 1: Locate the record in the current view
            await self.collection.refresh()
            existing = self.collection.find(command.record_id)

            if not existing:
                logger.warning(f"Update of unknown record {command.record_id} in {self.collection.key}")
                return self._not_found(command.record_id)

            # Step 2: Merge and recompute
            record = self.engine.apply_changes(existing, command.changes, self.clock.today())

            # Step 3: Required fields
            missing = record.missing_required_fields()
            if missing:
                return self._validation_error(RecordValidationError(missing))

            # Step 4: Persist to the owning partition
            saved = await self.collection.save(record, is_new=False)
            if not saved:
                return self._not_found(command.record_id)

            await self.uow.commit()

            logger.info(f"Updated record {record.id} in {self.collection.key}")

            return Return.ok(record)

        except RecordValidationError as e:
            return self._validation_error(e)

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="UPDATE_RECORD_FAILED",
                    message="Failed to update record",
                    reason=str(e),
                )
            )

    def _not_found(self, record_id: str) -> Result[LedgerRecord]:
        return Return.err(
            Error(
                code="RECORD_NOT_FOUND",
                message=f"Record {record_id} not found",
                reason=f"No record with this id in {self.collection.key}",
            )
        )

    def _validation_error(self, error: RecordValidationError) -> Result[LedgerRecord]:
        return Return.err(
            Error(
                code="VALIDATION_ERROR",
                message=str(error),
                reason=", ".join(error.fields),
            )
        )
