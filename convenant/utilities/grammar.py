"""Dutch grammar rules for templates.

Grammar rules are placeholders whose key is a "singular/plural" pair, e.g.
``[[heeft/hebben]]``. The builder picks the form from the number of
children (or, for collection rules, the number of items in a collection).
"""

import logging
from typing import TYPE_CHECKING

from convenant.utilities.dutch import (
    VERB_FORMS,
    child_term,
    format_list,
    object_pronoun,
    subject_pronoun,
)

if TYPE_CHECKING:
    from core import CaseData, Child

logger = logging.getLogger(__name__)

# Prefix for rules based on all children instead of minors only
ALL_CHILDREN_PREFIX = "alle "


def _count_rules(is_plural: bool, prefix: str = "") -> dict[str, str]:
    """Rules that only depend on singular/plural."""
    rules = {
        f"{prefix}ons kind/onze kinderen": child_term(is_plural),
        f"{prefix}het kind/de kinderen": "de kinderen" if is_plural else "het kind",
        f"{prefix}kind/kinderen": "kinderen" if is_plural else "kind",
    }
    for singular, plural in VERB_FORMS.items():
        rules[f"{prefix}{singular}/{plural}"] = plural if is_plural else singular
    rules[f"{prefix}zijn/haar/hun"] = "hun" if is_plural else "zijn/haar"
    rules[f"{prefix}diens/dier/hun"] = "hun" if is_plural else "diens/dier"
    return rules


def _pronoun_rules(children: list["Child"], prefix: str = "") -> dict[str, str]:
    """Object/subject pronouns, gender-specific for exactly one child."""
    if len(children) > 1:
        return {
            f"{prefix}hem/haar/hen": object_pronoun(None, is_plural=True),
            f"{prefix}hij/zij/ze": subject_pronoun(None, is_plural=True),
        }
    if len(children) == 1:
        gender = children[0].gender
        return {
            f"{prefix}hem/haar/hen": object_pronoun(gender),
            f"{prefix}hij/zij/ze": subject_pronoun(gender),
        }
    return {
        f"{prefix}hem/haar/hen": "hem/haar",
        f"{prefix}hij/zij/ze": "hij/zij",
    }


class GrammarRulesBuilder:
    """Builds singular/plural and pronoun rules for a case."""

    def build_rules(self, children: list["Child"]) -> dict[str, str]:
        """Create grammar rules from the children of a case.

        The plain rules follow the minor children; the "alle ..." rules
        follow all children, minor or adult.
        """
        minors = [c for c in children if c.is_minor]
        is_plural = len(minors) > 1
        logger.debug(
            f"Building grammar rules: {len(minors)} minor of {len(children)} children"
        )

        names = [c.display_name for c in minors]
        if len(minors) == 1:
            kind = names[0] or "het kind"
            kinderen = "de kinderen"
        elif minors:
            kind = kinderen = format_list(names)
        else:
            kind = "het kind"
            kinderen = "de kinderen"

        rules = {"KIND": kind, "KINDEREN": kinderen}
        rules.update(_count_rules(is_plural))
        rules.update(_pronoun_rules(minors))

        all_plural = len(children) > 1
        rules.update(_count_rules(all_plural, ALL_CHILDREN_PREFIX))
        rules.update(_pronoun_rules(children, ALL_CHILDREN_PREFIX))

        logger.info(f"Created {len(rules)} grammar rules")
        return rules

    def build_simple_rules(self, child_count: int) -> dict[str, str]:
        """Create grammar rules from a child count alone.

        Without child records there are no names or genders, so KIND is
        the generic term and pronouns use the neutral forms.
        """
        is_plural = child_count > 1
        rules = {
            "KIND": "de kinderen" if is_plural else "het kind",
            "KINDEREN": "de kinderen",
        }
        for prefix in ("", ALL_CHILDREN_PREFIX):
            rules.update(_count_rules(is_plural, prefix))
            rules[f"{prefix}hem/haar/hen"] = "hen" if is_plural else "hem/haar"
            rules[f"{prefix}hij/zij/ze"] = "ze" if is_plural else "hij/zij"

        logger.info(f"Created {len(rules)} simple grammar rules")
        return rules

    def add_collection_rules(self, rules: dict[str, str], case_data: "CaseData") -> int:
        """Add singular/plural rules for registry collections with items.

        Runs after build_rules, so existing keys are never overwritten.
        Collections without items (or with unreadable data) are skipped and
        the first collection claiming a shared key wins. Returns the number
        of rules added.
        """
        from template_resolver.registry import get_registry

        added = 0
        for definition in get_registry().all_collections():
            if not definition.grammar:
                continue
            count = len(definition.load_items(case_data))
            if count == 0:
                continue
            is_plural = count > 1
            for singular, plural in definition.grammar:
                key = f"{singular}/{plural}"
                if key not in rules:
                    rules[key] = plural if is_plural else singular
                    added += 1

        logger.info(f"Added {added} collection grammar rules")
        return added
