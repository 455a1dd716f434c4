"""Schema extraction exports."""

from .extraction_contracts import AttributeFilter, ExtractionRequest, ProgressObserver
from .extraction_orchestrator import SchemaExtractionError, extract_schema
from .extraction_run import ExtractionOutcome, resolve_output_target, run_extraction

__all__ = [
    "AttributeFilter",
    "ExtractionOutcome",
    "ExtractionRequest",
    "ProgressObserver",
    "SchemaExtractionError",
    "extract_schema",
    "resolve_output_target",
    "run_extraction",
]
