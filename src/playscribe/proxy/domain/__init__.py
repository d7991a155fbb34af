"""Domain layer exports."""

from .anonymization import (
    generate_request_id,
    hash_request_metadata,
    mint_request_record,
    size_class,
)
from .models import SubmittedJob

__all__ = [
    "SubmittedJob",
    "generate_request_id",
    "hash_request_metadata",
    "mint_request_record",
    "size_class",
]
