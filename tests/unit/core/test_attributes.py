"""Tests for the ContractTerms model."""

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from pamsched.core.attributes import ATTRIBUTE_MAP, ContractTerms
from pamsched.core.time import ActusDate
from pamsched.core.types import (
    BusinessDayConvention,
    Calendar,
    ContractRole,
    DayCountConvention,
    ScalingEffect,
)
from pamsched.exceptions import (
    DateTimeError,
    InvalidPeriodError,
    InvalidTermsError,
    UnsupportedConventionError,
)


class TestContractTermsConstruction:
    """Test coercion and defaults."""

    def test_minimal_terms(self, make_terms):
        terms = make_terms()
        assert terms.contract_id == "TEST-001"
        assert terms.initial_exchange_date == ActusDate(2024, 1, 1)
        assert terms.notional_principal == Decimal("100000")
        assert terms.business_day_convention is BusinessDayConvention.NONE
        assert terms.interest_payment_cycle is None

    def test_dates_are_coerced(self, make_terms):
        terms = make_terms(maturity_date=date(2030, 6, 30), purchase_date="2024-06-01T00:00:00")
        assert terms.maturity_date == ActusDate(2030, 6, 30)
        assert terms.purchase_date == ActusDate(2024, 6, 1)

    def test_optional_fields_absent(self, make_terms):
        terms = make_terms(maturity_date=None)
        assert terms.maturity_date is None
        assert terms.termination_date is None
        assert terms.scaling_effect is None

    def test_conventions_are_parsed(self, make_terms):
        terms = make_terms(
            business_day_convention="ModifiedFollowing",
            day_count_convention="ACT/360",
            calendar="target",
            scaling_effect="I00",
            contract_role="RPL",
        )
        assert terms.business_day_convention is BusinessDayConvention.MODIFIED_FOLLOWING
        assert terms.day_count_convention is DayCountConvention.A360
        assert terms.calendar is Calendar.TARGET
        assert terms.scaling_effect is ScalingEffect.I00
        assert terms.contract_role is ContractRole.RPL
        assert terms.role_sign == -1

    def test_unknown_calendar_kept_as_text(self, make_terms):
        assert make_terms(calendar="ZURICH").calendar == "ZURICH"

    def test_terms_are_frozen(self, make_terms):
        terms = make_terms()
        with pytest.raises(ValidationError):
            terms.maturity_date = ActusDate(2030, 1, 1)


class TestContractTermsValidation:
    """Test field and cross-field validation."""

    def test_maturity_before_initial_exchange(self, make_terms):
        with pytest.raises(InvalidTermsError):
            make_terms(maturity_date="2023-12-31")

    def test_termination_before_status_date(self, make_terms):
        with pytest.raises(InvalidTermsError):
            make_terms(status_date="2024-06-01", termination_date="2024-05-31")

    def test_maturity_equal_to_initial_exchange_allowed(self, make_terms):
        assert make_terms(maturity_date="2024-01-01").maturity_date == ActusDate(2024, 1, 1)

    def test_invalid_cycle(self, make_terms):
        with pytest.raises(InvalidPeriodError):
            make_terms(interest_payment_cycle="every quarter")

    def test_zero_cycle(self, make_terms):
        with pytest.raises(InvalidPeriodError):
            make_terms(rate_reset_cycle="P0M")

    def test_unsupported_convention(self, make_terms):
        with pytest.raises(UnsupportedConventionError):
            make_terms(business_day_convention="NEAREST")

    def test_unparsable_date(self, make_terms):
        with pytest.raises(DateTimeError):
            make_terms(status_date="01/01/2024")

    def test_invalid_currency(self, make_terms):
        with pytest.raises(ValidationError):
            make_terms(currency="usd")

    def test_zero_notional(self, make_terms):
        with pytest.raises(ValidationError):
            make_terms(notional_principal=0)

    def test_interest_rate_floor(self, make_terms):
        with pytest.raises(ValidationError):
            make_terms(nominal_interest_rate=-1.0)
        assert make_terms(nominal_interest_rate=-0.005).nominal_interest_rate == -0.005


class TestAttributeLookup:
    """Test ACTUS short name access."""

    def test_get_attribute(self, make_terms):
        terms = make_terms(interest_payment_cycle="6M")
        assert terms.get_attribute("IPCL") == "6M"
        assert terms.get_attribute("MD") == ActusDate(2029, 1, 1)

    def test_unknown_attribute(self, make_terms):
        with pytest.raises(KeyError):
            make_terms().get_attribute("XYZ")

    def test_is_attribute_defined(self, make_terms):
        terms = make_terms()
        assert terms.is_attribute_defined("NT")
        assert not terms.is_attribute_defined("TD")
        assert not terms.is_attribute_defined("XYZ")

    def test_attribute_map_targets_exist(self):
        for field_name in ATTRIBUTE_MAP.values():
            assert field_name in ContractTerms.model_fields


class TestFromActus:
    """Test construction from ACTUS test-case dictionaries."""

    def test_pam_test_case_terms(self):
        terms = ContractTerms.from_actus(
            {
                "contractType": "PAM",
                "contractID": "pam01",
                "contractRole": "RPA",
                "currency": "USD",
                "statusDate": "2012-12-30T00:00:00",
                "initialExchangeDate": "2013-01-01T00:00:00",
                "maturityDate": "2014-01-01T00:00:00",
                "notionalPrincipal": "3000",
                "nominalInterestRate": "0.1",
                "dayCountConvention": "A365",
                "cycleAnchorDateOfInterestPayment": "2013-04-01T00:00:00",
                "cycleOfInterestPayment": "P3ML0",
                "premiumDiscountAtIED": "0",
            }
        )
        assert terms.contract_id == "pam01"
        assert terms.status_date == ActusDate(2012, 12, 30)
        assert terms.notional_principal == Decimal("3000")
        assert terms.nominal_interest_rate == pytest.approx(0.1)
        assert terms.interest_payment_cycle == "P3ML0"
        assert terms.day_count_convention is DayCountConvention.A365

    def test_empty_values_ignored(self):
        terms = ContractTerms.from_actus(
            {
                "contractID": "pam02",
                "statusDate": "2024-01-01",
                "initialExchangeDate": "2024-01-01",
                "notionalPrincipal": 1000,
                "terminationDate": "",
                "cycleOfRateReset": None,
            }
        )
        assert terms.termination_date is None
        assert terms.rate_reset_cycle is None
