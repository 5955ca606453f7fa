"""Conditional rule evaluation.

A condition is either a leaf ``{veld, operator, waarde}`` or a group
``{operator: AND|OR, voorwaarden: [...]}``. A rule set is an ordered list
of ``(conditie, resultaat)`` rules plus a default; the first rule whose
condition holds wins.

Stored JSON shape::

    {
        "default": "Partijen hebben geen kinderen.",
        "regels": [
            {
                "conditie": {"veld": "AantalKinderen", "operator": ">", "waarde": 1},
                "resultaat": "Partijen hebben [[AantalKinderen]] kinderen."
            }
        ]
    }

JSON is validated with pydantic models and converted to the frozen
dataclasses below, which the evaluator works on. Evaluation never raises
on context content: a missing field is undefined for comparisons and
empty for the emptiness operators.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, model_validator

from convenant.utilities.formatting import parse_decimal
from core.mapping import CaseInsensitiveDict
from template_resolver.errors import ConditionConfigError

logger = logging.getLogger(__name__)

AND = "AND"
OR = "OR"

# Dutch spellings accepted for group operators
LOGICAL_OPERATORS = {"AND": AND, "EN": AND, "OR": OR, "OF": OR}

OPERATORS = frozenset(
    {
        "=",
        "!=",
        ">",
        ">=",
        "<",
        "<=",
        "leeg",
        "niet_leeg",
        "bevat",
        "begint_met",
        "eindigt_met",
        "in",
        "niet_in",
    }
)

OPERATOR_ALIASES = {"==": "=", "<>": "!="}

TRUE_VALUES = {"true", "ja", "j", "yes", "y", "1", "waar"}
FALSE_VALUES = {"false", "nee", "n", "no", "0", "onwaar"}


# =============================================================================
# Condition tree
# =============================================================================


@dataclass(frozen=True)
class LeafCondition:
    """Compare one context field against a value."""

    field: str
    operator: str
    value: Any = None


@dataclass(frozen=True)
class GroupCondition:
    """AND/OR over child conditions."""

    logical_operator: str
    children: tuple["Condition", ...] = ()


Condition = Union[LeafCondition, GroupCondition]


@dataclass(frozen=True)
class Rule:
    condition: Condition
    result: str


@dataclass(frozen=True)
class RuleSet:
    default: str = ""
    rules: tuple[Rule, ...] = ()


@dataclass(frozen=True)
class EvaluationResult:
    """Outcome of a rule set: 1-based matched rule (None for default) and text."""

    matched_rule: int | None
    result: str

    @property
    def is_default(self) -> bool:
        return self.matched_rule is None


# =============================================================================
# JSON models
# =============================================================================


class ConditionModel(BaseModel):
    """Condition JSON; Dutch keys, English accepted too."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    veld: str | None = Field(default=None, validation_alias=AliasChoices("veld", "field"))
    operator: str | None = None
    waarde: Any = Field(default=None, validation_alias=AliasChoices("waarde", "value"))
    voorwaarden: list["ConditionModel"] | None = Field(
        default=None, validation_alias=AliasChoices("voorwaarden", "conditions")
    )

    @model_validator(mode="after")
    def check_shape(self) -> "ConditionModel":
        operator = (self.operator or "").strip()
        if self.voorwaarden is not None:
            if self.veld is not None or "waarde" in self.model_fields_set:
                raise ValueError("Condition has both veld/waarde and voorwaarden")
            if operator.upper() not in LOGICAL_OPERATORS:
                raise ValueError(f"Group condition needs AND or OR, got {operator!r}")
        elif not self.veld or not operator:
            raise ValueError("Condition needs veld and operator, or voorwaarden")
        return self

    def to_condition(self) -> Condition:
        if self.voorwaarden is not None:
            return GroupCondition(
                logical_operator=LOGICAL_OPERATORS[self.operator.strip().upper()],
                children=tuple(c.to_condition() for c in self.voorwaarden),
            )
        value = self.waarde
        if isinstance(value, list):
            value = tuple(value)
        return LeafCondition(field=self.veld.strip(), operator=self.operator.strip(), value=value)


ConditionModel.model_rebuild()


class RuleModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    conditie: ConditionModel = Field(validation_alias=AliasChoices("conditie", "condition"))
    resultaat: str = Field(default="", validation_alias=AliasChoices("resultaat", "result"))


class RuleSetModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    default: str | None = None
    regels: list[RuleModel] = Field(
        default_factory=list, validation_alias=AliasChoices("regels", "rules")
    )

    def to_rule_set(self) -> RuleSet:
        return RuleSet(
            default=self.default or "",
            rules=tuple(
                Rule(condition=r.conditie.to_condition(), result=r.resultaat)
                for r in self.regels
            ),
        )


def _validate(model: type[BaseModel], data: str | Mapping[str, Any]) -> BaseModel:
    try:
        if isinstance(data, str):
            return model.model_validate_json(data)
        return model.model_validate(data)
    except ValidationError as e:
        raise ConditionConfigError(f"Invalid {model.__name__}: {e}") from e


def parse_condition(data: str | Mapping[str, Any]) -> Condition:
    """Parse condition JSON (string or dict). Raises ConditionConfigError."""
    return _validate(ConditionModel, data).to_condition()


def parse_rule_set(data: str | Mapping[str, Any]) -> RuleSet:
    """Parse rule-set JSON (string or dict). Raises ConditionConfigError."""
    return _validate(RuleSetModel, data).to_rule_set()


def load_condition(data: str | None) -> Condition | None:
    """Lenient parse for stored condition JSON: logs and returns None on error."""
    if not data or not data.strip():
        return None
    try:
        return parse_condition(data)
    except ConditionConfigError as e:
        logger.warning(f"Ignoring invalid condition config: {e}")
        return None


def load_rule_set(data: str | None) -> RuleSet | None:
    """Lenient parse for stored rule-set JSON: logs and returns None on error."""
    if not data or not data.strip():
        return None
    try:
        return parse_rule_set(data)
    except ConditionConfigError as e:
        logger.warning(f"Ignoring invalid rule set: {e}")
        return None


# =============================================================================
# Evaluation
# =============================================================================


def _to_bool(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if value is None:
        return None
    text = str(value).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    return None


def _to_number(value: Any) -> Decimal | None:
    return parse_decimal(value)


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value).strip()


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0
    return _text(value) == ""


def _equals(actual: Any, expected: Any) -> bool:
    if actual is None or expected is None:
        return actual is None and expected is None

    if isinstance(actual, bool) or isinstance(expected, bool):
        left, right = _to_bool(actual), _to_bool(expected)
        if left is not None and right is not None:
            return left == right

    left_num, right_num = _to_number(actual), _to_number(expected)
    if left_num is not None and right_num is not None:
        return left_num == right_num

    return _text(actual).casefold() == _text(expected).casefold()


def _compare(actual: Any, expected: Any, operator: str) -> bool:
    left, right = _to_number(actual), _to_number(expected)
    if left is None or right is None:
        return False
    if operator == ">":
        return left > right
    if operator == ">=":
        return left >= right
    if operator == "<":
        return left < right
    return left <= right


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple, set)):
        return list(value)
    return [value]


def _evaluate_leaf(condition: LeafCondition, context: Mapping[str, Any]) -> bool:
    operator = condition.operator.strip().lower()
    operator = OPERATOR_ALIASES.get(operator, operator)
    actual = context.get(condition.field)
    expected = condition.value

    if operator == "=":
        return _equals(actual, expected)
    elif operator == "!=":
        return not _equals(actual, expected)
    elif operator in (">", ">=", "<", "<="):
        return _compare(actual, expected, operator)
    elif operator == "leeg":
        return _is_empty(actual)
    elif operator == "niet_leeg":
        return not _is_empty(actual)
    elif operator in ("bevat", "begint_met", "eindigt_met"):
        if actual is None:
            return False
        haystack = _text(actual).casefold()
        needle = _text(expected).casefold()
        if operator == "bevat":
            return needle in haystack
        if operator == "begint_met":
            return haystack.startswith(needle)
        return haystack.endswith(needle)
    elif operator == "in":
        return any(_equals(actual, option) for option in _as_list(expected))
    elif operator == "niet_in":
        return not any(_equals(actual, option) for option in _as_list(expected))

    logger.warning(f"Unknown condition operator {condition.operator!r} on {condition.field}")
    return False


def _evaluate(condition: Condition, context: Mapping[str, Any]) -> bool:
    if isinstance(condition, GroupCondition):
        if condition.logical_operator == OR:
            return any(_evaluate(child, context) for child in condition.children)
        return all(_evaluate(child, context) for child in condition.children)
    return _evaluate_leaf(condition, context)


def _as_context(context: Mapping[str, Any]) -> Mapping[str, Any]:
    if isinstance(context, CaseInsensitiveDict):
        return context
    return CaseInsensitiveDict(context)


def evaluate_condition(condition: Condition, context: Mapping[str, Any]) -> bool:
    """Evaluate one condition tree. Field names are matched case-insensitively."""
    return _evaluate(condition, _as_context(context))


def evaluate(rule_set: RuleSet, context: Mapping[str, Any]) -> EvaluationResult:
    """Return the first matching rule's result, or the default."""
    ctx = _as_context(context)
    for index, rule in enumerate(rule_set.rules, start=1):
        if _evaluate(rule.condition, ctx):
            logger.debug(f"Rule {index} matched")
            return EvaluationResult(matched_rule=index, result=rule.result)
    return EvaluationResult(matched_rule=None, result=rule_set.default)

