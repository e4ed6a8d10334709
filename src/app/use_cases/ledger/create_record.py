"""CreateRecord Use Case

Creates a ledger record in a view's collection, computing its derived
fields once before the first write.
"""

import logging
from src.libs.result import Result, Return, Error
from src.app.services.clock import Clock
from src.app.services.record_collection import RecordCollection
from src.app.services.unit_of_work import UnitOfWork
from src.domain.derived_fields import DerivedFieldEngine
from src.domain.errors import RecordValidationError
from src.domain.ledger_record import LedgerRecord
from .dtos import CreateRecordCommandDTO

logger = logging.getLogger(__name__)


class CreateRecord:
    """
    Use Case: Create a ledger record

    Business Rules:
    1. A fresh id is always assigned; a supplied id is ignored
    2. date defaults to today, currency to the base currency
    3. code is generated from the id when not supplied
    4. counterparty_name, base_amount and currency are required
    5. Derived fields are computed before the record is persisted
    6. source_module/source_tab are honoured only in a mother view and must
       name one of its partitions; other views own what they create

    Flow:
    1. Merge supplied fields onto a blank record and recompute
    2. Fill defaults (date, code)
    3. Validate required fields
    4. Save through the collection (owning partition in a mother view)
    5. Commit
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

    async def execute(self, command: CreateRecordCommandDTO) -> Result[LedgerRecord]:
        """
        Execute record creation

        Args:
            command: CreateRecordCommandDTO with the base field values

        Returns:
            Result[LedgerRecord]: The stored record or error
        """
        try:
            today = self.clock.today()

            # Step 1: Blank record plus user input, derived fields computed
            blank = LedgerRecord(
                date=today.isoformat(),
                currency=self.engine.currency_table.base_currency,
            )
            # Ownership tags are accepted only in a mother view
            record = self.engine.apply_changes(
                blank, command.fields, today, allow_ownership=self.collection.is_federated
            )

            # Step 2: Defaults the user left blank
            updates = {}
            if not record.date:
                updates["date"] = today.isoformat()
            if not record.code.strip():
                updates["code"] = f"REC-{record.id[:8].upper()}"
            if updates:
                record = record.model_copy(update=updates)

            # Step 3: Required fields
            missing = record.missing_required_fields()
            if missing:
                return self._validation_error(RecordValidationError(missing))

            # Step 4: Persist
            await self.collection.refresh()
            await self.collection.save(record, is_new=True)
            await self.uow.commit()

            logger.info(f"Created record {record.id} ({record.code}) in {self.collection.key}")

            return Return.ok(self.collection.find(record.id) or record)

        except RecordValidationError as e:
            return self._validation_error(e)

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="CREATE_RECORD_FAILED",
                    message="Failed to create record",
                    reason=str(e),
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
