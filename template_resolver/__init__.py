"""Template Resolution Engine for convenant documents.

Provides loop expansion over case collections, conditional rule
evaluation and placeholder resolution.

Usage:
    from template_resolver import expand_loops, replace_placeholders
    from core import CaseData

    text = expand_loops(template, case_data)
    text = replace_placeholders(text, replacements)

Loop collections are either structural (children of the case) or
registered JSON-backed collections (see template_resolver.collections).
"""

from template_resolver.conditions import (
    Condition,
    EvaluationResult,
    GroupCondition,
    LeafCondition,
    Rule,
    RuleSet,
    evaluate,
    evaluate_condition,
    load_condition,
    load_rule_set,
    parse_condition,
    parse_rule_set,
)
from template_resolver.context import build_evaluation_context
from template_resolver.errors import ConditionConfigError, RegistryError, ResolutionError
from template_resolver.loops import MAX_ITERATIONS, expand_loops
from template_resolver.placeholders import replace_placeholders, resolve_nested
from template_resolver.registry import (
    CollectionDefinition,
    CollectionRegistry,
    get_registry,
    register_collection,
)

__all__ = [
    # Main API
    "expand_loops",
    "replace_placeholders",
    "resolve_nested",
    "evaluate",
    "evaluate_condition",
    "build_evaluation_context",
    "MAX_ITERATIONS",
    # Conditions
    "Condition",
    "EvaluationResult",
    "GroupCondition",
    "LeafCondition",
    "Rule",
    "RuleSet",
    "load_condition",
    "load_rule_set",
    "parse_condition",
    "parse_rule_set",
    # Registry
    "CollectionDefinition",
    "CollectionRegistry",
    "get_registry",
    "register_collection",
    # Errors
    "ConditionConfigError",
    "RegistryError",
    "ResolutionError",
]

# Import all collection modules to register them
# This happens automatically when the package is imported
from template_resolver import collections  # noqa: F401, E402
