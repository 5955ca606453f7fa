"""Dutch language helpers: list conjunction, pronouns, verb agreement."""

from collections.abc import Iterable

MALE = {"m", "man", "jongen"}
FEMALE = {"v", "vrouw", "meisje"}

# Singular -> plural verb forms used by the grammar rules
VERB_FORMS: dict[str, str] = {
    "heeft": "hebben",
    "is": "zijn",
    "verblijft": "verblijven",
    "kan": "kunnen",
    "zal": "zullen",
    "moet": "moeten",
    "wordt": "worden",
    "blijft": "blijven",
    "gaat": "gaan",
    "komt": "komen",
    "zou": "zouden",
    "wil": "willen",
    "mag": "mogen",
    "doet": "doen",
    "krijgt": "krijgen",
    "neemt": "nemen",
    "brengt": "brengen",
    "haalt": "halen",
}

# Nationalities whose adjective is not simply "<name>e"
_NATIONALITY_ADJECTIVES = {
    "nederlands": "Nederlandse",
    "belgisch": "Belgische",
    "duits": "Duitse",
    "turks": "Turkse",
    "marokkaans": "Marokkaanse",
    "surinaams": "Surinaamse",
    "frans": "Franse",
    "brits": "Britse",
    "pools": "Poolse",
    "spaans": "Spaanse",
    "italiaans": "Italiaanse",
}


def _gender(value: str | None) -> str | None:
    key = (value or "").strip().lower()
    if key in MALE:
        return "m"
    if key in FEMALE:
        return "v"
    return None


def format_list(items: Iterable[str] | None) -> str:
    """Join names Dutch style: 'A', 'A en B', 'A, B en C'."""
    if not items:
        return ""
    values = [item for item in items if item]
    if not values:
        return ""
    if len(values) == 1:
        return values[0]
    return f"{', '.join(values[:-1])} en {values[-1]}"


def object_pronoun(gender: str | None, is_plural: bool = False) -> str:
    """hem / haar / hen"""
    if is_plural:
        return "hen"
    return {"m": "hem", "v": "haar"}.get(_gender(gender), "hem/haar")


def subject_pronoun(gender: str | None, is_plural: bool = False) -> str:
    """hij / zij / ze"""
    if is_plural:
        return "ze"
    return {"m": "hij", "v": "zij"}.get(_gender(gender), "hij/zij")


def possessive_pronoun(gender: str | None, is_plural: bool = False) -> str:
    """zijn / haar / hun"""
    if is_plural:
        return "hun"
    return {"m": "zijn", "v": "haar"}.get(_gender(gender), "zijn/haar")


def child_term(is_plural: bool) -> str:
    return "onze kinderen" if is_plural else "ons kind"


def verb_form(singular: str, is_plural: bool) -> str:
    """Plural agreement for a known verb ('heeft' -> 'hebben')."""
    if not is_plural:
        return singular
    return VERB_FORMS.get(singular, singular)


def nationality_adjective(nationality: str | None) -> str:
    """'Nederlands' -> 'Nederlandse'; unknown values get an 'e' appended."""
    value = (nationality or "").strip()
    if not value:
        return ""
    known = _NATIONALITY_ADJECTIVES.get(value.lower())
    if known:
        return known
    return f"{value[0].upper()}{value[1:]}e"
