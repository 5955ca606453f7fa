"""Exceptions raised by the template resolver.

Template and case content never raises; these signal programmer errors
such as registering a collection twice or passing an invalid rule set to
the strict parsing API.
"""


class ResolutionError(Exception):
    """Base class for template resolver errors."""


class RegistryError(ResolutionError):
    """Invalid collection registration (e.g. duplicate name)."""


class ConditionConfigError(ResolutionError):
    """Condition or rule-set JSON that cannot be parsed."""
