"""Core data types for convenant document generation.

All data structures are plain dataclasses with attribute access. Case data
is built by the caller once per generation request; the engine only reads
it.

Financial arrangements keep their items as raw JSON array strings, exactly
as they are stored. The collection registry parses them on demand.
"""

from dataclasses import dataclass, field
from datetime import date

from convenant.config import get_adult_age, today


def _join_name(*parts: str | None) -> str:
    return " ".join(p.strip() for p in parts if p and p.strip())


@dataclass(frozen=True)
class Party:
    """One of the two parties (partij 1 / partij 2)."""

    id: int | None = None
    first_names: str | None = None  # voornamen
    name_prefix: str | None = None  # tussenvoegsel
    surname: str | None = None  # achternaam
    gender: str | None = None  # "m" | "v" | "man" | "vrouw"
    role_id: int | None = None  # 1 = partij 1, 2 = partij 2

    @property
    def full_name(self) -> str:
        """'Jan de Vries'"""
        return _join_name(self.first_names, self.name_prefix, self.surname)


@dataclass
class Child:
    """A child of the parties. Age is derived, never stored."""

    id: int | None = None
    first_names: str | None = None
    surname: str | None = None
    name_prefix: str | None = None
    call_name: str | None = None
    birth_date: date | None = None
    birth_place: str | None = None
    gender: str | None = None

    def age_on(self, reference: date) -> int | None:
        """Age in whole years on the reference date."""
        if self.birth_date is None:
            return None
        born = self.birth_date
        age = reference.year - born.year
        if (reference.month, reference.day) < (born.month, born.day):
            age -= 1
        return age

    @property
    def age(self) -> int | None:
        return self.age_on(today())

    @property
    def is_minor(self) -> bool:
        """Known age below the adult age. Unknown age is not a minor."""
        age = self.age
        return age is not None and age < get_adult_age()

    @property
    def display_name(self) -> str:
        """Call name, else first given name, else surname."""
        if self.call_name:
            return self.call_name
        if self.first_names and self.first_names.split():
            return self.first_names.split()[0]
        return self.surname or ""

    @property
    def surname_with_prefix(self) -> str:
        return _join_name(self.name_prefix, self.surname)

    @property
    def full_name(self) -> str:
        return _join_name(self.first_names, self.name_prefix, self.surname)


@dataclass
class CovenantInfo:
    """Covenant (convenant) settlement data.

    Collection fields hold raw JSON arrays; see template_resolver.collections.
    """

    marriage_date: date | None = None  # huwelijksdatum
    has_children_from_marriage: bool | None = None
    has_children_before_marriage: bool | None = None
    recognition_date: date | None = None  # erkenningsdatum

    # Raw JSON arrays
    bank_accounts: str | None = None  # bankrekeningen
    investments: str | None = None  # beleggingen
    vehicles: str | None = None  # voertuigen
    insurances: str | None = None  # verzekeringen
    debts: str | None = None  # schulden
    claims: str | None = None  # vorderingen
    pensions: str | None = None  # pensioenen


@dataclass
class CommunicationAgreements:
    """Communication and children's-account agreements (ouderschapsplan)."""

    children_bank_accounts: str | None = None  # JSON array


@dataclass
class ConditionalPlaceholder:
    """A placeholder whose value is chosen by a rule set.

    rule_set_json uses the stored shape:
    {"default": "...", "regels": [{"conditie": {...}, "resultaat": "..."}]}
    """

    key: str
    rule_set_json: str | None = None


@dataclass
class CaseData:
    """Root context for one document-generation request."""

    id: int | None = None
    parties: list[Party] = field(default_factory=list)
    children: list[Child] = field(default_factory=list)
    covenant_info: CovenantInfo | None = None
    communication_agreements: CommunicationAgreements | None = None
    is_anonymous: bool | None = None

    # Placeholder catalogue values; only fill keys not set by the case itself
    custom_placeholders: dict[str, str] = field(default_factory=dict)
    # Rule-set placeholders, evaluated last; they override every other value
    conditional_placeholders: list[ConditionalPlaceholder] = field(
        default_factory=list
    )

    def _party(self, role_id: int) -> Party | None:
        for party in self.parties:
            if party.role_id == role_id:
                return party
        index = role_id - 1
        if 0 <= index < len(self.parties) and self.parties[index].role_id is None:
            return self.parties[index]
        return None

    @property
    def party1(self) -> Party | None:
        return self._party(1)

    @property
    def party2(self) -> Party | None:
        return self._party(2)

    def child_by_id(self, child_id: int) -> Child | None:
        for child in self.children:
            if child.id == child_id:
                return child
        return None

    @property
    def minor_children(self) -> list[Child]:
        return [c for c in self.children if c.is_minor]


@dataclass
class Article:
    """An article from the article library with user/case overrides.

    Text priority: case (dossier) > user (gebruiker) > system.
    """

    code: str
    title: str = ""
    text: str = ""
    order: int = 0
    is_conditional: bool = False
    condition_field: str | None = None  # "Veld", "!Veld", "Veld=waarde"
    condition_config_json: str | None = None  # AND/OR condition JSON

    user_title: str | None = None
    user_text: str | None = None
    case_text: str | None = None
    is_excluded: bool = False

    @property
    def effective_title(self) -> str:
        return self.user_title or self.title

    @property
    def effective_text(self) -> str:
        return self.case_text or self.user_text or self.text

    @property
    def source(self) -> str:
        """Where the effective text comes from: dossier, gebruiker or systeem."""
        if self.case_text:
            return "dossier"
        if self.user_text:
            return "gebruiker"
        return "systeem"
