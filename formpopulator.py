# formpopulator.py

# Maps the user's W-4 answers onto form field assignments.
# Nothing here touches a PDF: the caller applies the assignments.

import enum
import re
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Protocol, Sequence

from fieldcatalog import CALC_FIELDS, FILING_STATUS_FIELDS, SSN_FIELD_CANDIDATES, W4_FIELDS
from schemas import CalcResults, UserData


class AssignmentKind(enum.Enum):
    TEXT = "text"
    CHECK = "check"


@dataclass(frozen=True)
class FieldAssignment:
    target_field: str
    kind: AssignmentKind
    value: Optional[str] = None


class FormHandle(Protocol):
    def has_readable_text_field(self, identifier: str) -> bool: ...


def upper(value: Any) -> str:
    return str(value or "").strip().upper()


def format_ssn(ssn: Optional[str]) -> str:
    """
    Formats a social security number as DDD-DD-DDDD.
    Input that doesn't reduce to exactly nine digits is returned as given.
    """
    if not ssn:
        return ""
    digits = re.sub(r"\D", "", ssn)
    if len(digits) != 9:
        return ssn
    return f"{digits[:3]}-{digits[3:5]}-{digits[5:]}"


def format_amount(amount: float) -> str:
    """Shortest decimal form: 2000.0 -> '2000', 1234.5 -> '1234.5'."""
    if isinstance(amount, float) and amount.is_integer():
        return str(int(amount))
    return str(amount)


def city_state_zip(user: UserData) -> str:
    city, state, zip_code = (str(part or "").strip() for part in (user.city, user.state, user.zip_code))
    # the comma stays even when city or state is empty
    tail = " ".join(part for part in (state, zip_code) if part)
    return upper(f"{city}, {tail}")


def find_first_text_field(form: Optional[FormHandle], candidates: Sequence[str]) -> Optional[str]:
    if form is None:
        return None
    for identifier in candidates:
        if form.has_readable_text_field(identifier):
            return identifier
    return None


def compute_assignments(
    user: UserData,
    calc: CalcResults,
    form: Optional[FormHandle] = None,
    catalog: Mapping[str, str] = W4_FIELDS,
    ssn_candidates: Sequence[str] = SSN_FIELD_CANDIDATES,
) -> List[FieldAssignment]:
    """
    Returns the ordered field assignments for one W-4.

    `form` is only consulted to pick the SSN box out of `ssn_candidates`;
    without it no SSN assignment is produced.
    """
    def text(name: str, value: str) -> FieldAssignment:
        return FieldAssignment(catalog[name], AssignmentKind.TEXT, value)

    def check(name: str) -> FieldAssignment:
        return FieldAssignment(catalog[name], AssignmentKind.CHECK)

    # Step 1(a)/(b)
    assignments = [
        text("firstName", upper(user.first_name)),
        text("lastName", upper(user.last_name)),
        text("address", upper(user.address)),
        text("cityStateZip", city_state_zip(user)),
    ]

    ssn_field = find_first_text_field(form, ssn_candidates)
    if ssn_field:
        assignments.append(FieldAssignment(ssn_field, AssignmentKind.TEXT, format_ssn(user.ssn)))

    # Step 1(c)
    filing_field = FILING_STATUS_FIELDS.get(user.filing or "")
    if filing_field:
        assignments.append(check(filing_field))

    # Step 2(c)
    if calc.multiple_jobs:
        assignments.append(check("multipleJobs"))

    # Steps 3 and 4: zero means "not claimed" and leaves the box blank
    for attribute, name in CALC_FIELDS:
        amount = getattr(calc, attribute)
        if amount > 0:
            assignments.append(text(name, format_amount(amount)))

    return assignments
