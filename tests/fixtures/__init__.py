# Test Fixtures Package
# openFDA label records for testing

from .labels import (
    ASPIRIN_LABEL,
    IBUPROFEN_LABEL,
    LISINOPRIL_LABEL,
    METFORMIN_LABEL,
    SAMPLE_LABELS,
    TYLENOL_LABEL,
    WARFARIN_LABEL,
    create_label,
)

__all__ = [
    "create_label",
    "SAMPLE_LABELS",
    "ASPIRIN_LABEL",
    "IBUPROFEN_LABEL",
    "LISINOPRIL_LABEL",
    "METFORMIN_LABEL",
    "TYLENOL_LABEL",
    "WARFARIN_LABEL",
]
