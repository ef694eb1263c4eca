from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def _to_float(s: Any) -> float:
    if s is None: return 0.0
    try:
        if isinstance(s, (int, float)): return float(s)
        return float(str(s).replace(",", "").replace("$", ""))
    except (ValueError, TypeError, OverflowError): return 0.0


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserData(_CamelModel):
    """Personal details entered by the user. Every field is optional."""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = Field(default=None, alias="zip")
    ssn: Optional[str] = None
    filing: Optional[str] = Field(default=None, validation_alias=AliasChoices("filing", "filingStatus"))

    @field_validator("*", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> Optional[str]:
        if value is None or isinstance(value, str):
            return value
        return str(value)


class CalcResults(_CamelModel):
    """Withholding worksheet results computed client-side."""
    multiple_jobs: bool = False
    children_credit: float = 0
    other_credit: float = 0
    total_credits: float = 0
    other_income: float = 0
    deductions: float = 0
    extra_withholding: float = 0

    @field_validator("multiple_jobs", mode="before")
    @classmethod
    def _truthy(cls, value: Any) -> bool:
        # any non-empty string counts, "false" included
        return bool(value)

    @field_validator(
        "children_credit", "other_credit", "total_credits",
        "other_income", "deductions", "extra_withholding",
        mode="before",
    )
    @classmethod
    def _amount(cls, value: Any) -> float:
        return _to_float(value)


class GenerateW4Request(_CamelModel):
    user_data: UserData = Field(default_factory=UserData)
    calc_results: CalcResults = Field(default_factory=CalcResults)
    auth_token: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("authToken", "whopToken", "auth_token"),
    )

    @field_validator("user_data", "calc_results", mode="before")
    @classmethod
    def _null_to_empty(cls, value: Any) -> Any:
        return {} if value is None else value
