# tests/test_holders.py

"""
Holder model tests: tagged holder references, range validation on ESG
scores and holdings, and current-score selection.
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
from pydantic import TypeAdapter, ValidationError

from carbon_analytics.holders import (
    AssetClass,
    CompanyHolder,
    EsgScoreRecord,
    HolderRef,
    Holding,
    Instrument,
    InstrumentHolder,
    InstrumentType,
    PortfolioHolder,
    latest_esg_score,
)

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def apple():
    return CompanyHolder(id=uuid4())


@pytest.fixture
def google():
    return CompanyHolder(id=uuid4())


class TestHolderRef:
    """A holder reference names exactly one kind of entity."""

    def test_discriminates_on_kind(self):
        adapter = TypeAdapter(HolderRef)
        entity_id = uuid4()
        assert isinstance(adapter.validate_python({"kind": "portfolio", "id": entity_id}), PortfolioHolder)
        assert isinstance(adapter.validate_python({"kind": "instrument", "id": entity_id}), InstrumentHolder)

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValidationError):
            TypeAdapter(HolderRef).validate_python({"kind": "client", "id": uuid4()})

    def test_same_id_different_kind_not_equal(self):
        entity_id = uuid4()
        assert CompanyHolder(id=entity_id) != PortfolioHolder(id=entity_id)

    def test_instrument_exposes_holder(self):
        etf = Instrument(isin="ETF", name="My ETF", instrument_type=InstrumentType.ETF, asset_class=AssetClass.REAL_ESTATE)
        assert etf.holder == InstrumentHolder(id=etf.id)


class TestInstrument:

    def test_enum_values(self):
        assert len(InstrumentType) == 11
        assert [a.value for a in AssetClass] == [
            "equity", "fixed_income", "cash_equivalent", "commodity", "real_estate",
        ]

    def test_name_required(self):
        with pytest.raises(ValidationError):
            Instrument(isin="applehq1", name="", instrument_type="mortgage", asset_class="real_estate")

    def test_unknown_instrument_type_rejected(self):
        with pytest.raises(ValidationError):
            Instrument(isin="x", name="x", instrument_type="crypto", asset_class="equity")


class TestEsgScoreRecord:
    """Sub-scores outside [0, 1] are rejected before scoring."""

    @pytest.mark.parametrize("field", ["environmental", "social", "governance"])
    @pytest.mark.parametrize("value", [-0.001, 1.001])
    def test_out_of_range_rejected(self, apple, field, value):
        values = {"environmental": 0.5, "social": 0.5, "governance": 0.5, field: value}
        with pytest.raises(ValidationError):
            EsgScoreRecord(holder=apple, **values)

    def test_bounds_inclusive(self, apple):
        record = EsgScoreRecord(holder=apple, environmental=0, social=1, governance=1)
        assert record.score() == pytest.approx(2 / 3)

    def test_score(self, apple):
        record = EsgScoreRecord(holder=apple, environmental=0.002, social=0.4, governance=0.8)
        assert record.score() == 0.40066667
        assert record.score(precision=1) == 0.4


class TestHolding:

    def test_weight_bounds(self, apple):
        Holding(holder=apple, instrument_id=uuid4(), weight=0.8)
        with pytest.raises(ValidationError):
            Holding(holder=apple, instrument_id=uuid4(), weight=1.2)


class TestLatestEsgScore:
    """Only the most recently created score is current."""

    def test_picks_most_recent(self, apple):
        old = EsgScoreRecord(holder=apple, environmental=0.1, social=0.1, governance=0.1, created_at=T0)
        new = EsgScoreRecord(holder=apple, environmental=0.9, social=0.9, governance=0.9, created_at=T0 + timedelta(days=1))
        assert latest_esg_score([new, old]) is new
        assert latest_esg_score([old, new]) is new

    def test_filters_by_holder(self, apple, google):
        mine = EsgScoreRecord(holder=apple, environmental=0.1, social=0.1, governance=0.1, created_at=T0)
        theirs = EsgScoreRecord(holder=google, environmental=0.2, social=0.2, governance=0.2, created_at=T0 + timedelta(hours=1))
        assert latest_esg_score([mine, theirs], holder=apple) is mine

    def test_tie_goes_to_last_seen(self, apple):
        first = EsgScoreRecord(holder=apple, environmental=0.1, social=0.1, governance=0.1, created_at=T0)
        second = EsgScoreRecord(holder=apple, environmental=0.2, social=0.2, governance=0.2, created_at=T0)
        assert latest_esg_score([first, second]) is second

    def test_naive_created_at_rejected(self, apple):
        with pytest.raises(ValidationError):
            EsgScoreRecord(holder=apple, environmental=0.1, social=0.1, governance=0.1, created_at=datetime(2024, 1, 1))

    def test_explicit_and_default_timestamps_compare(self, apple):
        explicit = EsgScoreRecord(holder=apple, environmental=0.1, social=0.1, governance=0.1, created_at=T0)
        defaulted = EsgScoreRecord(holder=apple, environmental=0.2, social=0.2, governance=0.2)
        assert latest_esg_score([defaulted, explicit]) is defaulted

    def test_none_when_no_scores(self, apple, google):
        record = EsgScoreRecord(holder=google, environmental=0.1, social=0.1, governance=0.1)
        assert latest_esg_score([]) is None
        assert latest_esg_score([record], holder=apple) is None
