"""Query functionality: access patterns for system declarations."""

from fpcontrol.core.query.models import (
    AccessPattern,
    AllAccess,
    NoAccess,
    TypeAccess,
)
from fpcontrol.core.query.operations import (
    normalize_access,
    normalize_reads_and_writes,
)

__all__ = [
    # Models
    "AccessPattern",
    "AllAccess",
    "NoAccess",
    "TypeAccess",
    # Operations
    "normalize_access",
    "normalize_reads_and_writes",
]
