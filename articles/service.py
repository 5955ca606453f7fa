"""Article text pipeline.

Articles are the building blocks of a convenant. For each article the
service decides whether it is shown, then resolves its text:

1. loop sections (``[[#COLLECTION]]...[[/COLLECTION]]``)
2. conditional blocks (``[[IF:Veld]]...[[ENDIF:Veld]]``)
3. placeholders (``[[Veld]]``, ``[[caps:Veld]]``)

Replacements are built once per document by ``build_replacements``:
catalogue values fill the gaps, conditional placeholders (rule sets) are
evaluated last and override any value with the same key.
"""

import logging
import re
from collections.abc import Mapping, MutableMapping

from core import Article, CaseData, CaseInsensitiveDict
from template_resolver.conditions import evaluate, evaluate_condition, load_condition, parse_rule_set
from template_resolver.context import build_evaluation_context
from template_resolver.errors import ConditionConfigError
from template_resolver.loops import BLANK_LINES_PATTERN, MAX_ITERATIONS, expand_loops
from template_resolver.placeholders import replace_placeholders, resolve_nested

logger = logging.getLogger(__name__)

IF_BLOCK_PATTERN = re.compile(
    r"\[\[IF:(\w+)\]\](.*?)\[\[ENDIF:\1\]\]", re.DOTALL | re.IGNORECASE
)

# Values that count as "no value" for simple conditions
FALSY_VALUES = {"0", "false"}


def has_value(name: str, replacements: Mapping[str, str]) -> bool:
    """A field has a value when it is non-blank and not "0" or "false"."""
    value = replacements.get(name)
    if value is None:
        return False
    text = str(value).strip()
    return text != "" and text.lower() not in FALSY_VALUES


def evaluate_simple_condition(condition: str | None, replacements: Mapping[str, str]) -> bool:
    """Evaluate a simple condition string.

    Supported forms:
        "Veld"         field has a value
        "!Veld"        field has no value
        "Veld=waarde"  field equals value (case-insensitive)
        "Veld!=waarde" field does not equal value
    An empty condition is true.
    """
    if not condition or not condition.strip():
        return True

    if "!=" in condition:
        name, expected = condition.split("!=", 1)
        actual = str(replacements.get(name.strip()) or "")
        return actual.casefold() != expected.strip().casefold()

    if "=" in condition:
        name, expected = condition.split("=", 1)
        actual = str(replacements.get(name.strip()) or "")
        return actual.casefold() == expected.strip().casefold()

    condition = condition.strip()
    if condition.startswith("!"):
        return not has_value(condition[1:].strip(), replacements)
    return has_value(condition, replacements)


class ArticleService:
    """Filters articles and resolves article text for one document."""

    def filter_conditional_articles(
        self,
        articles: list[Article],
        replacements: Mapping[str, str],
        case_data: CaseData | None = None,
    ) -> list[Article]:
        """Keep the articles whose condition holds.

        Priority: JSON condition config (needs case data) > simple condition
        field > always shown. Excluded articles are always dropped.
        """
        if not articles:
            return []

        lookup = CaseInsensitiveDict(replacements)
        context = build_evaluation_context(case_data, lookup) if case_data is not None else None

        result = []
        for article in articles:
            if article.is_excluded:
                logger.debug(f"Article '{article.code}' excluded")
                continue

            if not article.is_conditional:
                result.append(article)
                continue

            condition = load_condition(article.condition_config_json)
            if condition is not None and context is not None:
                visible = evaluate_condition(condition, context)
                logger.debug(f"Article '{article.code}' condition config is {visible}")
            elif article.condition_field:
                visible = evaluate_simple_condition(article.condition_field, lookup)
                logger.debug(
                    f"Article '{article.code}' condition '{article.condition_field}' is {visible}"
                )
            else:
                visible = True

            if visible:
                result.append(article)

        return result

    def process_conditional_blocks(self, text: str | None, replacements: Mapping[str, str]) -> str | None:
        """Resolve [[IF:Veld]]...[[ENDIF:Veld]] blocks.

        A true condition keeps the trimmed content, a false one removes the
        whole block. Nested blocks are handled by reprocessing the text.
        """
        if not text:
            return text

        lookup = CaseInsensitiveDict(replacements)

        def replace(match: re.Match) -> str:
            if evaluate_simple_condition(match.group(1), lookup):
                return match.group(2).strip()
            return ""

        previous = None
        current = text
        iteration = 0
        while current != previous and iteration < MAX_ITERATIONS:
            previous = current
            current = IF_BLOCK_PATTERN.sub(replace, current)
            iteration += 1

        current = BLANK_LINES_PATTERN.sub("\n\n", current)
        return current.strip()

    def replace_placeholders(self, text: str | None, replacements: Mapping[str, str]) -> str | None:
        return replace_placeholders(text, replacements)

    def process_article_text(
        self,
        article: Article,
        replacements: Mapping[str, str],
        case_data: CaseData | None = None,
    ) -> str:
        """Resolve the effective text of an article: loops, IF blocks, placeholders."""
        logger.debug(f"Resolving article '{article.code}' ({article.source} text)")
        text = article.effective_text
        text = expand_loops(text, case_data)
        text = self.process_conditional_blocks(text, replacements)
        text = self.replace_placeholders(text, replacements)
        return text or ""

    def build_replacements(
        self, case_data: CaseData, replacements: Mapping[str, str] | None = None
    ) -> CaseInsensitiveDict:
        """Layer the replacement values for one document.

        1. the given replacements (grammar rules and case fields)
        2. catalogue values from ``case_data.custom_placeholders``, only for
           keys not set in step 1
        3. conditional placeholders from ``case_data.conditional_placeholders``,
           which override anything before them
        """
        result = CaseInsensitiveDict(replacements or {})

        added = 0
        for key, value in case_data.custom_placeholders.items():
            if key not in result:
                result[key] = value
                added += 1
        if case_data.custom_placeholders:
            logger.info(f"Added {added} custom placeholders")

        self.resolve_conditional_placeholders(result, case_data)
        logger.info(f"Built {len(result)} total placeholder replacements")
        return result

    def resolve_conditional_placeholders(
        self, replacements: MutableMapping[str, str], case_data: CaseData
    ) -> MutableMapping[str, str]:
        """Evaluate the case's rule-set placeholders into replacements.

        Results may contain placeholders themselves; these are resolved
        against the replacements. A rule set that cannot be read stores an
        empty value. Returns the updated replacements.
        """
        conditional_placeholders = case_data.conditional_placeholders
        if not conditional_placeholders:
            return replacements

        context = build_evaluation_context(case_data, replacements)

        for placeholder in conditional_placeholders:
            try:
                rule_set = parse_rule_set(placeholder.rule_set_json or "{}")
            except ConditionConfigError as e:
                logger.warning(f"Conditional placeholder {placeholder.key} ignored: {e}")
                replacements[placeholder.key] = ""
                continue

            outcome = evaluate(rule_set, context)
            value = resolve_nested(outcome.result, replacements) or ""
            replacements[placeholder.key] = value
            context[placeholder.key] = value
            logger.debug(
                f"Conditional placeholder {placeholder.key}: rule {outcome.matched_rule or 'default'}"
            )

        logger.info(f"Evaluated {len(conditional_placeholders)} conditional placeholders")
        return replacements
