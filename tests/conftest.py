"""Shared fixtures: a fixed "today" and a small case with two parties."""

from datetime import date
from unittest.mock import patch

import pytest

from core import CaseData, Child, CommunicationAgreements, CovenantInfo, Party

TODAY = date(2026, 1, 15)


@pytest.fixture(autouse=True)
def fixed_today():
    """Child ages are derived from this date in every test."""
    with patch("core.types.today", return_value=TODAY):
        yield TODAY


@pytest.fixture
def parties() -> list[Party]:
    return [
        Party(first_names="Jan", name_prefix="de", surname="Vries", role_id=1, gender="m"),
        Party(first_names="Maria", surname="Jansen", role_id=2, gender="v"),
    ]


@pytest.fixture
def case_data(parties) -> CaseData:
    """Case with parties only: no children, no covenant data."""
    return CaseData(id=1, parties=parties)


@pytest.fixture
def children() -> list[Child]:
    return [
        Child(
            id=1,
            first_names="Sophie",
            surname="Vries",
            name_prefix="de",
            birth_date=date(2015, 3, 20),
            birth_place="Amsterdam",
            gender="v",
        ),
        Child(
            id=2,
            first_names="Thomas",
            surname="Vries",
            name_prefix="de",
            birth_date=date(2018, 8, 15),
            birth_place="Utrecht",
            gender="m",
        ),
    ]


@pytest.fixture
def case_with_children(parties, children) -> CaseData:
    return CaseData(
        id=2,
        parties=parties,
        children=children,
        covenant_info=CovenantInfo(has_children_from_marriage=True),
    )


def with_covenant(data: CaseData, **fields) -> CaseData:
    """Attach covenant info with the given fields (JSON collections etc.)."""
    info = data.covenant_info or CovenantInfo()
    for name, value in fields.items():
        setattr(info, name, value)
    data.covenant_info = info
    return data


def with_children_accounts(data: CaseData, json_text: str | None) -> CaseData:
    data.communication_agreements = CommunicationAgreements(children_bank_accounts=json_text)
    return data
