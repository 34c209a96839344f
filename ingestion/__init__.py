from ingestion.errors import (
    DuplicateDefinitionError,
    MalformedRecordError,
    QifImportError,
    UnknownReferenceError,
    UnreconciledTransferError,
    UnsupportedValueError,
)
from ingestion.qif import ImportResult, builder_from_config, ingest
from ingestion.sink import RecordSink

__all__ = [
    "DuplicateDefinitionError",
    "ImportResult",
    "MalformedRecordError",
    "QifImportError",
    "RecordSink",
    "UnknownReferenceError",
    "UnreconciledTransferError",
    "UnsupportedValueError",
    "builder_from_config",
    "ingest",
]
