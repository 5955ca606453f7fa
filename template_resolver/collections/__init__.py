"""JSON-backed loop collections.

Each module in this package registers collections using the
@register_collection decorator:

- bank_accounts: BANKREKENINGEN_KINDEREN, BANKREKENINGEN
- assets: BELEGGINGEN, VOERTUIGEN, VERZEKERINGEN
- liabilities: SCHULDEN, VORDERINGEN
- pensions: PENSIOENEN

Import this module to register all collections with the registry.
Registration order is the order grammar rules are claimed in.
"""

from template_resolver.registry import get_registry

# Import all collection modules to trigger registration (noqa: F401 for side-effect imports)
from template_resolver.collections import (  # noqa: F401
    bank_accounts,
    assets,
    liabilities,
    pensions,
)

__all__ = ["get_registry"]
