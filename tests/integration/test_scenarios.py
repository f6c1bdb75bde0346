"""End-to-end PAM scheduling scenarios."""

import pytest

from pamsched import ContractTerms, EventType, schedule_pam_events
from pamsched.core.time import ActusDate

pytestmark = pytest.mark.integration

HORIZON = "2035-01-01"


def dated(schedule) -> list[tuple[str, str]]:
    return [(e.event_type.value, e.event_time.to_iso()) for e in schedule]


class TestScenarios:
    def test_bullet_loan_without_cycles(self, make_terms):
        schedule = schedule_pam_events(HORIZON, make_terms())
        assert dated(schedule) == [("IED", "2024-01-01"), ("MD", "2029-01-01")]

    def test_quarterly_interest(self, make_terms):
        terms = make_terms(
            maturity_date="2025-01-01",
            interest_payment_anchor="2024-04-01",
            interest_payment_cycle="3M",
        )
        assert dated(schedule_pam_events(HORIZON, terms)) == [
            ("IED", "2024-01-01"),
            ("IP", "2024-04-01"),
            ("IP", "2024-07-01"),
            ("IP", "2024-10-01"),
            ("MD", "2025-01-01"),
        ]

    def test_capitalized_interest(self, make_terms):
        terms = make_terms(
            maturity_date="2026-01-01",
            interest_payment_anchor="2024-07-01",
            interest_payment_cycle="6M",
            capitalization_end_date="2025-01-01",
        )
        assert dated(schedule_pam_events(HORIZON, terms)) == [
            ("IED", "2024-01-01"),
            ("IPCI", "2024-07-01"),
            ("IPCI", "2025-01-01"),
            ("IP", "2025-07-01"),
            ("MD", "2026-01-01"),
        ]

    def test_status_date_after_initial_exchange(self, make_terms):
        terms = make_terms(
            status_date="2025-01-01",
            interest_payment_anchor="2024-01-01",
            interest_payment_cycle="1Y",
        )
        schedule = schedule_pam_events(HORIZON, terms)
        assert all(e.event_time >= ActusDate(2025, 1, 1) for e in schedule)
        assert EventType.IED not in schedule.event_types()
        assert ActusDate(2024, 1, 1) not in schedule.get_times()
        assert dated(schedule) == [
            ("IP", "2025-01-01"),
            ("IP", "2026-01-01"),
            ("IP", "2027-01-01"),
            ("IP", "2028-01-01"),
            ("MD", "2029-01-01"),
        ]

    def test_full_lifecycle(self, make_terms):
        """Purchase, fixed reset, fees and early termination together."""
        terms = make_terms(
            interest_payment_anchor="2024-07-01",
            interest_payment_cycle="6M",
            rate_reset_anchor="2024-07-01",
            rate_reset_cycle="1Y",
            next_reset_rate=0.045,
            fee_payment_anchor="2024-12-31",
            fee_payment_cycle="1Y",
            purchase_date="2024-03-01",
            termination_date="2026-03-31",
        )
        assert dated(schedule_pam_events(HORIZON, terms)) == [
            ("IED", "2024-01-01"),
            ("PRD", "2024-03-01"),
            ("IP", "2024-07-01"),
            ("RRF", "2024-07-01"),
            ("FP", "2024-12-31"),
            ("IP", "2025-01-01"),
            ("IP", "2025-07-01"),
            ("RR", "2025-07-01"),
            ("FP", "2025-12-31"),
            ("IP", "2026-01-01"),
            ("TD", "2026-03-31"),
        ]


class TestActusTerms:
    """Scheduling from ACTUS long-name term dictionaries."""

    @pytest.fixture
    def actus_terms(self) -> dict:
        return {
            "contractType": "PAM",
            "contractID": "pam01",
            "contractRole": "RPA",
            "currency": "USD",
            "statusDate": "2012-12-30T00:00:00",
            "initialExchangeDate": "2013-01-01T00:00:00",
            "maturityDate": "2014-01-01T00:00:00",
            "notionalPrincipal": "3000",
            "nominalInterestRate": "0.1",
            "cycleAnchorDateOfInterestPayment": "2013-04-01T00:00:00",
            "cycleOfInterestPayment": "P3ML0",
            "dayCountConvention": "30E360",
            "premiumDiscountAtIED": "0",
            "rateSpread": "",
        }

    def test_quarterly_schedule(self, actus_terms):
        terms = ContractTerms.from_actus(actus_terms)
        schedule = schedule_pam_events("2015-01-01", terms)
        assert schedule.contract_id == "pam01"
        assert dated(schedule) == [
            ("IED", "2013-01-01"),
            ("IP", "2013-04-01"),
            ("IP", "2013-07-01"),
            ("IP", "2013-10-01"),
            ("MD", "2014-01-01"),
        ]

    def test_business_day_terms(self, actus_terms):
        actus_terms.update(
            {
                "businessDayConvention": "SCF",
                "calendar": "NEW_YORK",
                "cycleAnchorDateOfInterestPayment": "2013-07-04T00:00:00",
                "cycleOfInterestPayment": "P1YL1",
                "maturityDate": "2015-07-04T00:00:00",
            }
        )
        schedule = schedule_pam_events("2020-01-01", ContractTerms.from_actus(actus_terms))
        # 2015-07-04 is a Saturday; the default table lists no 2014 holidays
        assert dated(schedule)[-1] == ("MD", "2015-07-06")
        assert ("IP", "2014-07-04") in dated(schedule)

    def test_dataframe_export(self, actus_terms):
        df = schedule_pam_events("2015-01-01", ContractTerms.from_actus(actus_terms)).to_dataframe()
        assert list(df["event_type"]) == ["IED", "IP", "IP", "IP", "MD"]
        assert set(df["currency"]) == {"USD"}
