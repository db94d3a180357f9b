"""Pure eligibility filters usable independently of the runtime."""

from .eligibility import (
    deduplicate,
    filter_and_deduplicate,
    filter_eligible,
    ineligibility_reason,
    is_eligible,
)

__all__ = [
    "deduplicate",
    "filter_and_deduplicate",
    "filter_eligible",
    "ineligibility_reason",
    "is_eligible",
]
