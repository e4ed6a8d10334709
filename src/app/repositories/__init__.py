from .record_partition_repository import RecordPartitionRepository

__all__ = [
    "RecordPartitionRepository",
]
