"""Holder, instrument, ESG score and holding records.

These mirror the records an external data layer owns. They carry the
field validation that must happen before scoring (fractions and weights in
[0, 1]) and the rule for picking a holder's current ESG score. Nothing here
is persisted.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Iterable, Literal, Optional, Union
from uuid import UUID, uuid4

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

from .core.models import EsgInputs
from .core.scoring import DEFAULT_ESG_PRECISION, calculate_esg_score


class InstrumentType(str, Enum):
    """Kind of financial instrument."""

    CASH = "cash"
    CERTIFICATE_OF_DEPOSIT = "certificate_of_deposit"
    ETF = "etf"
    FUTURES_CONTRACT = "futures_contract"
    LOAN = "loan"
    MORTGAGE = "mortgage"
    MUNI_BOND = "muni_bond"
    MUTUAL_FUND = "mutual_fund"
    REITS = "reits"
    STOCK = "stock"
    TREASURIES = "treasuries"


class AssetClass(str, Enum):
    """Broad asset class of an instrument."""

    EQUITY = "equity"
    FIXED_INCOME = "fixed_income"
    CASH_EQUIVALENT = "cash_equivalent"
    COMMODITY = "commodity"
    REAL_ESTATE = "real_estate"


# ─── Holder references ───────────────────────────────────────────────────────


class InstrumentHolder(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["instrument"] = "instrument"
    id: UUID


class CompanyHolder(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["company"] = "company"
    id: UUID


class PortfolioHolder(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["portfolio"] = "portfolio"
    id: UUID


HolderRef = Annotated[
    Union[InstrumentHolder, CompanyHolder, PortfolioHolder],
    Field(discriminator="kind"),
]


# ─── Records ─────────────────────────────────────────────────────────────────


class Instrument(BaseModel):
    """A financial instrument identified by ISIN."""

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    isin: str = Field(min_length=1)
    name: str = Field(min_length=1)
    instrument_type: InstrumentType
    asset_class: AssetClass

    @property
    def holder(self) -> InstrumentHolder:
        return InstrumentHolder(id=self.id)


Fraction = Annotated[float, Field(ge=0.0, le=1.0, allow_inf_nan=False)]


class EsgScoreRecord(BaseModel):
    """One ESG assessment attached to exactly one holder."""

    model_config = ConfigDict(frozen=True)

    holder: HolderRef
    environmental: Fraction
    social: Fraction
    governance: Fraction
    created_at: AwareDatetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def inputs(self) -> EsgInputs:
        return EsgInputs(
            environmental=self.environmental,
            social=self.social,
            governance=self.governance,
        )

    def score(self, precision: int = DEFAULT_ESG_PRECISION) -> float:
        return calculate_esg_score(self.inputs(), precision)


class Holding(BaseModel):
    """Weighted position of a holder in one instrument."""

    model_config = ConfigDict(frozen=True)

    holder: HolderRef
    instrument_id: UUID
    weight: Fraction


def latest_esg_score(
    records: Iterable[EsgScoreRecord],
    holder: Optional[HolderRef] = None,
) -> Optional[EsgScoreRecord]:
    """Return the most recently created score, optionally for one holder.

    On equal timestamps the record seen last wins.
    """
    latest = None
    for record in records:
        if holder is not None and record.holder != holder:
            continue
        if latest is None or record.created_at >= latest.created_at:
            latest = record
    return latest
