"""Contract terms for PAM contracts.

This module provides the ContractTerms model, the immutable input to the event
scheduler, using Pydantic for validation and coercion.

References:
    ACTUS Technical Specification v1.1, Sections 4-5 (Contract Attributes)
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from pamsched.core.time import ActusDate, parse_cycle
from pamsched.core.types import (
    BusinessDayConvention,
    Calendar,
    ContractRole,
    Cycle,
    DayCountConvention,
    EndOfMonthConvention,
    ScalingEffect,
)
from pamsched.exceptions import InvalidTermsError

_DATE_FIELDS = (
    "status_date",
    "initial_exchange_date",
    "maturity_date",
    "purchase_date",
    "termination_date",
    "capitalization_end_date",
    "interest_payment_anchor",
    "principal_redemption_anchor",
    "rate_reset_anchor",
    "fee_payment_anchor",
    "scaling_index_anchor",
)

_CYCLE_FIELDS = (
    "interest_payment_cycle",
    "principal_redemption_cycle",
    "rate_reset_cycle",
    "fee_payment_cycle",
    "scaling_index_cycle",
)


class ContractTerms(BaseModel):
    """Static terms of a Principal-at-Maturity contract.

    Instances are frozen. Date fields accept ``ActusDate``, ``datetime.date``
    or ISO strings; cycle fields are validated with the recurrence-period
    parser; convention fields accept ACTUS codes or descriptive names.

    Example:
        >>> terms = ContractTerms(
        ...     contract_id="LOAN-001",
        ...     status_date="2024-01-01",
        ...     initial_exchange_date="2024-01-15",
        ...     maturity_date="2029-01-15",
        ...     notional_principal=100000,
        ...     nominal_interest_rate=0.05,
        ...     interest_payment_anchor="2024-07-15",
        ...     interest_payment_cycle="6M",
        ... )

    References:
        ACTUS Technical Specification v1.1, Section 4
    """

    # ========== IDENTIFICATION AND DATES ==========
    contract_id: str = Field(..., description="Unique contract identifier")
    currency: str = Field(default="USD", description="Currency ISO code (CUR)")
    contract_role: ContractRole = Field(
        default=ContractRole.RPA, description="Contract role - asset or liability (CNTRL)"
    )
    status_date: ActusDate = Field(..., description="Status (as-of) date (SD)")
    initial_exchange_date: ActusDate = Field(..., description="Initial exchange date (IED)")
    maturity_date: ActusDate | None = Field(None, description="Nominal maturity date (MD)")
    purchase_date: ActusDate | None = Field(None, description="Purchase date (PRD)")
    termination_date: ActusDate | None = Field(None, description="Termination date (TD)")
    capitalization_end_date: ActusDate | None = Field(
        None, description="Interest capitalization end date (IPCED)"
    )

    # ========== NOTIONAL AND RATES ==========
    notional_principal: Decimal = Field(..., description="Notional principal amount (NT)")
    nominal_interest_rate: float = Field(0.0, description="Nominal interest rate (IPNR)")
    next_reset_rate: float | None = Field(
        None, description="Rate already fixed for the upcoming reset (RRNXT)"
    )
    fee_rate: float | None = Field(None, description="Fee rate (FER)")

    # ========== CYCLES ==========
    interest_payment_anchor: ActusDate | None = Field(None, description="IP anchor (IPANX)")
    interest_payment_cycle: Cycle | None = Field(None, description="IP cycle (IPCL)")
    principal_redemption_anchor: ActusDate | None = Field(None, description="PR anchor (PRANX)")
    principal_redemption_cycle: Cycle | None = Field(None, description="PR cycle (PRCL)")
    rate_reset_anchor: ActusDate | None = Field(None, description="RR anchor (RRANX)")
    rate_reset_cycle: Cycle | None = Field(None, description="RR cycle (RRCL)")
    fee_payment_anchor: ActusDate | None = Field(None, description="FP anchor (FEANX)")
    fee_payment_cycle: Cycle | None = Field(None, description="FP cycle (FECL)")
    scaling_index_anchor: ActusDate | None = Field(None, description="SC anchor (SCANX)")
    scaling_index_cycle: Cycle | None = Field(None, description="SC cycle (SCCL)")
    scaling_effect: ScalingEffect | None = Field(None, description="Scaling effect (SCEF)")

    # ========== CONVENTIONS ==========
    business_day_convention: BusinessDayConvention = Field(
        default=BusinessDayConvention.NONE, description="Business day convention (BDC)"
    )
    calendar: Calendar | str | None = Field(
        default=None, description="Holiday calendar name (CLDR)"
    )
    end_of_month_convention: EndOfMonthConvention = Field(
        default=EndOfMonthConvention.SD, description="End of month convention (EOMC)"
    )
    day_count_convention: DayCountConvention | None = Field(
        None, description="Day count convention, used by valuation (DCC)"
    )

    model_config = {
        "arbitrary_types_allowed": True,  # ActusDate
        "frozen": True,
    }

    @field_validator(*_DATE_FIELDS, mode="before")
    @classmethod
    def coerce_dates(cls, v: Any) -> Any:
        """Accept ISO strings and ``datetime.date`` for date fields."""
        if v is None or v == "":
            return None
        return ActusDate.coerce(v)

    @field_validator(*_CYCLE_FIELDS, mode="before")
    @classmethod
    def validate_cycles(cls, v: Any) -> Any:
        """Reject unparsable recurrence periods at construction."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        parse_cycle(v)
        return v.strip()

    @field_validator("business_day_convention", mode="before")
    @classmethod
    def parse_business_day_convention(cls, v: Any) -> BusinessDayConvention:
        return BusinessDayConvention.parse(v)

    @field_validator("day_count_convention", mode="before")
    @classmethod
    def parse_day_count_convention(cls, v: Any) -> DayCountConvention | None:
        if v is None or v == "":
            return None
        return DayCountConvention.parse(v)

    @field_validator("calendar", mode="before")
    @classmethod
    def normalize_calendar(cls, v: Any) -> Calendar | str | None:
        """Known calendar names become Calendar members; others stay as text."""
        if v is None or isinstance(v, Calendar):
            return v
        try:
            return Calendar(str(v).upper())
        except ValueError:
            return str(v)

    @field_validator("nominal_interest_rate")
    @classmethod
    def validate_interest_rate(cls, v: float) -> float:
        """Validate that interest rate is greater than -1 (can be negative)."""
        if v <= -1.0:
            raise ValueError(f"Interest rate must be > -1, got {v}")
        return v

    @field_validator("notional_principal")
    @classmethod
    def validate_notional(cls, v: Decimal) -> Decimal:
        if v == 0:
            raise ValueError("Notional principal must be non-zero")
        return v

    @field_validator("currency")
    @classmethod
    def validate_currency(cls, v: str) -> str:
        """Validate currency code is 3 uppercase letters."""
        if len(v) != 3 or not v.isalpha() or not v.isupper():
            raise ValueError(f"Currency code must be 3 uppercase letters, got '{v}'")
        return v

    @model_validator(mode="after")
    def validate_dates(self) -> ContractTerms:
        """Validate date ordering constraints."""
        check_date_order(self)
        return self

    @property
    def role_sign(self) -> int:
        """Cash flow sign implied by the contract role."""
        return self.contract_role.get_sign()

    def get_attribute(self, actus_name: str) -> Any:
        """Get attribute value by ACTUS short name.

        Raises:
            KeyError: If ACTUS name not recognized

        Example:
            >>> terms.get_attribute("IPCL")
            '6M'
        """
        if actus_name not in ATTRIBUTE_MAP:
            raise KeyError(f"Unknown ACTUS attribute name: {actus_name}")
        return getattr(self, ATTRIBUTE_MAP[actus_name])

    def is_attribute_defined(self, actus_name: str) -> bool:
        """Check whether the attribute with this ACTUS short name is set."""
        try:
            return self.get_attribute(actus_name) is not None
        except KeyError:
            return False

    @classmethod
    def from_actus(cls, data: Mapping[str, Any]) -> ContractTerms:
        """Build terms from an ACTUS test-case style ``terms`` dictionary.

        Keys are the ACTUS long names (``contractID``, ``statusDate``,
        ``cycleOfInterestPayment``...). Unknown keys are ignored; numeric
        values may be given as strings.

        Example:
            >>> ContractTerms.from_actus({
            ...     "contractID": "pam01",
            ...     "statusDate": "2012-12-30T00:00:00",
            ...     "initialExchangeDate": "2013-01-01T00:00:00",
            ...     "maturityDate": "2014-01-01T00:00:00",
            ...     "notionalPrincipal": "3000",
            ...     "cycleOfInterestPayment": "P3ML0",
            ...     "cycleAnchorDateOfInterestPayment": "2013-04-01T00:00:00",
            ... })
        """
        kwargs: dict[str, Any] = {}
        for actus_key, value in data.items():
            field_name = ACTUS_LONG_NAME_MAP.get(actus_key)
            if field_name is None or value is None or value == "":
                continue
            kwargs[field_name] = value
        return cls(**kwargs)


def check_date_order(terms: ContractTerms) -> None:
    """Raise InvalidTermsError if the terms' dates are inconsistent.

    Maturity may not precede the initial exchange and termination may not
    precede the status date.
    """
    if terms.maturity_date is not None and terms.maturity_date < terms.initial_exchange_date:
        raise InvalidTermsError(
            f"Maturity date {terms.maturity_date} is before initial exchange date "
            f"{terms.initial_exchange_date}",
            context={"contract_id": terms.contract_id},
        )
    if terms.termination_date is not None and terms.termination_date < terms.status_date:
        raise InvalidTermsError(
            f"Termination date {terms.termination_date} is before status date "
            f"{terms.status_date}",
            context={"contract_id": terms.contract_id},
        )


# Mapping from ACTUS short names to ContractTerms field names
ATTRIBUTE_MAP: dict[str, str] = {
    "CID": "contract_id",
    "CUR": "currency",
    "CNTRL": "contract_role",
    "SD": "status_date",
    "IED": "initial_exchange_date",
    "MD": "maturity_date",
    "PRD": "purchase_date",
    "TD": "termination_date",
    "IPCED": "capitalization_end_date",
    "NT": "notional_principal",
    "IPNR": "nominal_interest_rate",
    "RRNXT": "next_reset_rate",
    "FER": "fee_rate",
    "IPANX": "interest_payment_anchor",
    "IPCL": "interest_payment_cycle",
    "PRANX": "principal_redemption_anchor",
    "PRCL": "principal_redemption_cycle",
    "RRANX": "rate_reset_anchor",
    "RRCL": "rate_reset_cycle",
    "FEANX": "fee_payment_anchor",
    "FECL": "fee_payment_cycle",
    "SCANX": "scaling_index_anchor",
    "SCCL": "scaling_index_cycle",
    "SCEF": "scaling_effect",
    "BDC": "business_day_convention",
    "CLDR": "calendar",
    "EOMC": "end_of_month_convention",
    "DCC": "day_count_convention",
}

# Mapping from ACTUS long (JSON) names to ContractTerms field names
ACTUS_LONG_NAME_MAP: dict[str, str] = {
    "contractID": "contract_id",
    "currency": "currency",
    "contractRole": "contract_role",
    "statusDate": "status_date",
    "initialExchangeDate": "initial_exchange_date",
    "maturityDate": "maturity_date",
    "purchaseDate": "purchase_date",
    "terminationDate": "termination_date",
    "capitalizationEndDate": "capitalization_end_date",
    "notionalPrincipal": "notional_principal",
    "nominalInterestRate": "nominal_interest_rate",
    "nextResetRate": "next_reset_rate",
    "feeRate": "fee_rate",
    "cycleAnchorDateOfInterestPayment": "interest_payment_anchor",
    "cycleOfInterestPayment": "interest_payment_cycle",
    "cycleAnchorDateOfPrincipalRedemption": "principal_redemption_anchor",
    "cycleOfPrincipalRedemption": "principal_redemption_cycle",
    "cycleAnchorDateOfRateReset": "rate_reset_anchor",
    "cycleOfRateReset": "rate_reset_cycle",
    "cycleAnchorDateOfFee": "fee_payment_anchor",
    "cycleOfFee": "fee_payment_cycle",
    "cycleAnchorDateOfScalingIndex": "scaling_index_anchor",
    "cycleOfScalingIndex": "scaling_index_cycle",
    "scalingEffect": "scaling_effect",
    "businessDayConvention": "business_day_convention",
    "calendar": "calendar",
    "endOfMonthConvention": "end_of_month_convention",
    "dayCountConvention": "day_count_convention",
}
