"""Field formatting: raw values to Dutch display strings.

All functions are pure and return "" for missing input, so callers can
use them directly when filling template variables.
"""

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

DUTCH_MONTHS = (
    "januari",
    "februari",
    "maart",
    "april",
    "mei",
    "juni",
    "juli",
    "augustus",
    "september",
    "oktober",
    "november",
    "december",
)

DEFINITE_ARTICLES = ("de ", "het ", "'t ")

# Amounts with more integer digits than this are not formatted as money
MAX_AMOUNT_DIGITS = 18

# Area codes with three digits (including the leading zero); others use four
_THREE_DIGIT_AREA_CODES = {
    "010", "013", "015", "020", "023", "024", "026", "030", "033", "035",
    "036", "038", "040", "043", "045", "046", "050", "053", "055", "058",
    "070", "071", "072", "073", "074", "075", "076", "077", "078", "079",
}

# .NET-style date pattern tokens, longest first
_DATE_TOKEN_PATTERN = re.compile(r"yyyy|yy|MMMM|MM|M|dd|d")


def _as_date(value: date | datetime | None) -> date | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    return value


def format_date(value: date | datetime | None, fmt: str | None = None) -> str:
    """Format a date the Dutch way.

    Without a pattern the long form is used ("15 januari 2024"). A pattern
    may use the tokens d, dd, M, MM, MMMM, yy and yyyy ("dd-MM-yyyy").
    """
    d = _as_date(value)
    if d is None:
        return ""
    if not fmt:
        return f"{d.day} {DUTCH_MONTHS[d.month - 1]} {d.year}"

    def replace_token(match: re.Match) -> str:
        token = match.group(0)
        if token == "yyyy":
            return f"{d.year:04d}"
        if token == "yy":
            return f"{d.year % 100:02d}"
        if token == "MMMM":
            return DUTCH_MONTHS[d.month - 1]
        if token == "MM":
            return f"{d.month:02d}"
        if token == "M":
            return str(d.month)
        if token == "dd":
            return f"{d.day:02d}"
        return str(d.day)

    return _DATE_TOKEN_PATTERN.sub(replace_token, fmt)


def format_date_long(value: date | datetime | None) -> str:
    """Long Dutch date, e.g. '20 maart 2015'."""
    return format_date(value)


def parse_date(value: Any) -> date | None:
    """Parse an ISO date (or datetime) string; None when not parseable."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.fromisoformat(str(value).strip()).date()
    except ValueError:
        return None


def parse_decimal(value: Any) -> Decimal | None:
    """Convert a number or numeric string to Decimal.

    Accepts plain numbers ("5000.50") and Dutch notation ("5.000,50").
    Returns None for anything else, including booleans, NaN and infinity.
    """
    number = _to_decimal(value)
    if number is None or not number.is_finite():
        return None
    return number


def _to_decimal(value: Any) -> Decimal | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value
    if isinstance(value, (int, float)):
        return Decimal(str(value))

    text = str(value).strip().replace("€", "").replace(" ", "")
    if not text:
        return None
    try:
        return Decimal(text)
    except InvalidOperation:
        pass
    try:
        return Decimal(text.replace(".", "").replace(",", "."))
    except InvalidOperation:
        return None


def format_currency(amount: Any) -> str:
    """Format an amount as Dutch currency: '€ 1.234,56'."""
    value = parse_decimal(amount)
    if value is None or value.adjusted() >= MAX_AMOUNT_DIGITS:
        return ""
    # Group with ',' and '.', then swap to Dutch separators
    formatted = f"{abs(value):,.2f}"
    formatted = formatted.replace(",", "_").replace(".", ",").replace("_", ".")
    sign = "-" if value < 0 else ""
    return f"€ {sign}{formatted}"


def format_full_name(
    first_names: str | None, name_prefix: str | None, surname: str | None
) -> str:
    """Join given names, tussenvoegsel and surname: 'Pieter van der Berg'."""
    parts = [p.strip() for p in (first_names, name_prefix, surname) if p and p.strip()]
    return " ".join(parts)


def format_address(
    street: str | None, postcode: str | None, city: str | None
) -> str:
    """'Kerkstraat 1, 1234 AB Amsterdam' with missing parts left out."""
    locality = " ".join(p.strip() for p in (postcode, city) if p and p.strip())
    parts = [p for p in ((street or "").strip(), locality) if p]
    return ", ".join(parts)


def format_phone_number(number: str | None) -> str:
    """Dutch phone number with area-code dash.

    '0612345678' -> '06-12345678', '0201234567' -> '020-1234567'.
    Anything not a 10-digit national number is returned unchanged.
    """
    if not number:
        return ""
    digits = number.replace(" ", "").replace("-", "")
    if len(digits) != 10 or not digits.isdigit() or not digits.startswith("0"):
        return number
    if digits.startswith("06"):
        return f"{digits[:2]}-{digits[2:]}"
    if digits[:3] in _THREE_DIGIT_AREA_CODES:
        return f"{digits[:3]}-{digits[3:]}"
    return f"{digits[:4]}-{digits[4:]}"


def format_initials(first_names: str | None) -> str:
    """'Jan Peter' -> 'J.P.'"""
    if not first_names:
        return ""
    return "".join(f"{name[0].upper()}." for name in first_names.split())


def convert_to_string(value: Any) -> str:
    """Generic display conversion used for scalar placeholders."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "Ja" if value else "Nee"
    if isinstance(value, (date, datetime)):
        return format_date(value)
    return str(value)


def capitalize(text: str | None) -> str:
    """Upper-case the first character only."""
    if not text:
        return ""
    return text[0].upper() + text[1:]


def humanize_snake_case(code: str | None) -> str:
    """'doorlopend_krediet' -> 'Doorlopend krediet'."""
    if not code:
        return ""
    return capitalize(code.strip().replace("_", " "))


def format_iban(iban: str | None) -> str:
    """Group an account number in blocks of four: 'NL91 ABNA 0417 1643 00'."""
    if not iban:
        return ""
    compact = "".join(iban.split()).upper()
    return " ".join(compact[i : i + 4] for i in range(0, len(compact), 4))


def with_definite_article(name: str | None, article: str = "de") -> str:
    """Prefix an institution name with an article unless it has one."""
    if not name:
        return ""
    name = name.strip()
    if name.lower().startswith(DEFINITE_ARTICLES):
        return name
    return f"{article} {name}"
