from .record_partition_repository import KeyValueRecordPartitionRepository

__all__ = [
    "KeyValueRecordPartitionRepository",
]
