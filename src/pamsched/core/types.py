"""Type definitions and enumerations for PAM contracts.

All enumerations inherit from str for JSON serializability and easy comparison.
Convention enumerations provide a ``parse`` classmethod that accepts the ACTUS
codes together with common market aliases.

References:
    ACTUS Technical Specification v1.1, Section 2 (Notations)
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import TypeAlias

from pamsched.exceptions import UnsupportedConventionError

# Type aliases for clarity
Amount: TypeAlias = Decimal  # Monetary amount
Rate: TypeAlias = float  # Interest rate (decimal, e.g., 0.05 for 5%)
Cycle: TypeAlias = str  # Recurrence period text, e.g. '3M', 'P1Y', 'P6ML0'


class EventType(str, Enum):
    """PAM contract event types.

    References:
        ACTUS Technical Specification v1.1, Table 4
    """

    IED = "IED"  # Initial Exchange
    PR = "PR"  # Principal Redemption
    PP = "PP"  # Principal Prepayment
    IP = "IP"  # Interest Payment
    IPCI = "IPCI"  # Interest Capitalization
    FP = "FP"  # Fee Payment
    DV = "DV"  # Dividend
    RRF = "RRF"  # Rate Reset Fixing (rate already known)
    RR = "RR"  # Rate Reset
    MD = "MD"  # Maturity
    TD = "TD"  # Termination
    SC = "SC"  # Scaling Index Fixing
    PRD = "PRD"  # Purchase

    @property
    def sequence(self) -> int:
        """Rank used to order events that fall on the same date."""
        return EVENT_SEQUENCE_ORDER[self]


# Total order among events sharing a date. Lower rank comes first.
# Cash settlement of fees and principal precedes interest, fixings follow
# payments, and the contract-closing events come last.
EVENT_SEQUENCE_ORDER: dict[EventType, int] = {
    EventType.IED: 1,
    EventType.FP: 2,
    EventType.PR: 3,
    EventType.PP: 4,
    EventType.IP: 5,
    EventType.IPCI: 6,
    EventType.RRF: 7,
    EventType.RR: 8,
    EventType.DV: 9,
    EventType.PRD: 10,
    EventType.TD: 11,
    EventType.SC: 12,
    EventType.MD: 13,
}


class ContractRole(str, Enum):
    """Contract party role, which determines the sign of cash flows.

    References:
        ACTUS Technical Specification v1.1, Table 1
    """

    RPA = "RPA"  # Real Position Asset
    RPL = "RPL"  # Real Position Liability
    LG = "LG"  # Long Position
    ST = "ST"  # Short Position

    def get_sign(self) -> int:
        """Return +1 for asset/long positions and -1 for liability/short ones.

        Example:
            >>> ContractRole.RPL.get_sign()
            -1
        """
        return -1 if self in (ContractRole.RPL, ContractRole.ST) else 1


def _normalize(name: str) -> str:
    return "".join(ch for ch in name.upper() if ch.isalnum())


class BusinessDayConvention(str, Enum):
    """Business day adjustment conventions.

    Values are the ACTUS codes. The shift/calculate distinction of ACTUS
    (SC* vs CS*) does not affect scheduled dates, so both spellings parse to
    the same member.

    References:
        ACTUS Technical Specification v1.1, Section 3.4
    """

    NONE = "NULL"
    FOLLOWING = "SCF"
    MODIFIED_FOLLOWING = "SCMF"
    PRECEDING = "SCP"
    MODIFIED_PRECEDING = "SCMP"

    @classmethod
    def parse(cls, value: BusinessDayConvention | str | None) -> BusinessDayConvention:
        """Resolve a convention name or code.

        Args:
            value: Enum member, ACTUS code (``SCF``, ``CSMF``...), descriptive
                name (``Following``, ``ModifiedFollowing``...) or None

        Raises:
            UnsupportedConventionError: If the name is not recognized

        Example:
            >>> BusinessDayConvention.parse("ModifiedFollowing")
            <BusinessDayConvention.MODIFIED_FOLLOWING: 'SCMF'>
        """
        if value is None:
            return cls.NONE
        if isinstance(value, cls):
            return value
        key = _normalize(str(value))
        try:
            return _BDC_ALIASES[key]
        except KeyError:
            raise UnsupportedConventionError(
                f"Unsupported business day convention: {value}",
                context={"convention": value, "supported": sorted(_BDC_ALIASES)},
            ) from None


_BDC_ALIASES: dict[str, BusinessDayConvention] = {
    "NULL": BusinessDayConvention.NONE,
    "NONE": BusinessDayConvention.NONE,
    "UNADJUSTED": BusinessDayConvention.NONE,
    "SCF": BusinessDayConvention.FOLLOWING,
    "CSF": BusinessDayConvention.FOLLOWING,
    "F": BusinessDayConvention.FOLLOWING,
    "FOLLOWING": BusinessDayConvention.FOLLOWING,
    "SCMF": BusinessDayConvention.MODIFIED_FOLLOWING,
    "CSMF": BusinessDayConvention.MODIFIED_FOLLOWING,
    "MF": BusinessDayConvention.MODIFIED_FOLLOWING,
    "MODIFIEDFOLLOWING": BusinessDayConvention.MODIFIED_FOLLOWING,
    "SCP": BusinessDayConvention.PRECEDING,
    "CSP": BusinessDayConvention.PRECEDING,
    "P": BusinessDayConvention.PRECEDING,
    "PRECEDING": BusinessDayConvention.PRECEDING,
    "SCMP": BusinessDayConvention.MODIFIED_PRECEDING,
    "CSMP": BusinessDayConvention.MODIFIED_PRECEDING,
    "MP": BusinessDayConvention.MODIFIED_PRECEDING,
    "MODIFIEDPRECEDING": BusinessDayConvention.MODIFIED_PRECEDING,
}


class Calendar(str, Enum):
    """Named holiday calendars known to the default holiday table."""

    NO_CALENDAR = "NO_CALENDAR"  # Weekends only
    TARGET = "TARGET"  # Eurozone (ECB TARGET2)
    NEW_YORK = "NEW_YORK"  # US (Federal Reserve)
    LONDON = "LONDON"  # UK (Bank of England)


class DayCountConvention(str, Enum):
    """Day count conventions for year fraction calculation.

    References:
        ACTUS Technical Specification v1.1, Section 3.6
        ISDA 2006 Definitions
    """

    A360 = "A360"  # Actual/360
    A365 = "A365"  # Actual/365 Fixed
    E30360 = "30E360"  # 30E/360 (Eurobond basis)
    AA = "AA"  # Actual/Actual ISDA
    AAICMA = "AAICMA"  # Actual/Actual ICMA

    @classmethod
    def parse(cls, value: DayCountConvention | str) -> DayCountConvention:
        """Resolve a day count name such as ``ACT/360`` or ``30/360``.

        Raises:
            UnsupportedConventionError: If the name is not recognized
        """
        if isinstance(value, cls):
            return value
        key = _normalize(str(value))
        try:
            return _DCC_ALIASES[key]
        except KeyError:
            raise UnsupportedConventionError(
                f"Unsupported day count convention: {value}",
                context={"convention": value, "supported": sorted(_DCC_ALIASES)},
            ) from None


_DCC_ALIASES: dict[str, DayCountConvention] = {
    "A360": DayCountConvention.A360,
    "ACT360": DayCountConvention.A360,
    "A365": DayCountConvention.A365,
    "ACT365": DayCountConvention.A365,
    "ACT365F": DayCountConvention.A365,
    "ACT365FIXED": DayCountConvention.A365,
    "30E360": DayCountConvention.E30360,
    "30360": DayCountConvention.E30360,
    "THIRTY360": DayCountConvention.E30360,
    "AA": DayCountConvention.AA,
    "ACTACT": DayCountConvention.AA,
    "ACTACTISDA": DayCountConvention.AA,
    "AAICMA": DayCountConvention.AAICMA,
    "ACTACTICMA": DayCountConvention.AAICMA,
}


class EndOfMonthConvention(str, Enum):
    """End of month convention for month-based cycles.

    References:
        ACTUS Technical Specification v1.1, Section 3.3
    """

    EOM = "EOM"  # Stick to the last day of the month
    SD = "SD"  # Same day number (default)


class ScalingEffect(str, Enum):
    """Scaling index effect on contract.

    Three-character code: position 1 scales interest (I), position 2 scales
    notional (N), position 3 scales maturity (M); ``0`` disables a position.

    References:
        ACTUS Technical Specification v1.1
    """

    S000 = "000"
    I00 = "I00"
    S0N0 = "0N0"
    IN0 = "IN0"
    S00M = "00M"
    I0M = "I0M"
    S0NM = "0NM"
    INM = "INM"
