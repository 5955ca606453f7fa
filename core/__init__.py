"""Core types for convenant document generation.

All data structures are dataclasses with attribute access.
"""

from core.mapping import CaseInsensitiveDict
from core.types import (
    Article,
    CaseData,
    Child,
    CommunicationAgreements,
    ConditionalPlaceholder,
    CovenantInfo,
    Party,
)

__all__ = [
    # Types
    "Article",
    "CaseData",
    "Child",
    "CommunicationAgreements",
    "ConditionalPlaceholder",
    "CovenantInfo",
    "Party",
    # Mappings
    "CaseInsensitiveDict",
]
