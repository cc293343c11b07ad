"""Carbon liability and ESG composite scoring.

Both calculators are pure: they read an immutable input model and return a
number. Nothing here touches I/O, persistence, or the clock.
"""

from __future__ import annotations

import logging
from typing import Iterable, NamedTuple, Optional, Union

from .exceptions import InvalidDivisor, SelfCheckFailure
from .models import CarbonInputs, EsgInputs

logger = logging.getLogger(__name__)

Number = Union[int, float]

DISCOUNT_FACTOR = 0.5
MAX_DISCOUNT_FACTOR = 0.8
CO2_CONVERSION_FACTOR = 0.5

DEFAULT_ESG_PRECISION = 8


def _purchase_ratio(purchased: Number, total_energy_use: Number) -> Number:
    """Share of total energy use covered by purchased renewables.

    Two integer operands divide as integers (floored), matching how the
    reference figures were produced; anything else is true division.
    """
    if total_energy_use == 0:
        raise InvalidDivisor("total_energy_use is zero; the purchase ratio is undefined")
    if isinstance(purchased, int) and isinstance(total_energy_use, int):
        return purchased // total_energy_use
    return purchased / total_energy_use


class CarbonScoreCalculator:
    """Net carbon liability: emissions less credits, discounted by purchased
    renewables (capped), less an uncapped offset for produced renewables.
    """

    def __init__(
        self,
        discount_factor: float = DISCOUNT_FACTOR,
        max_discount_factor: float = MAX_DISCOUNT_FACTOR,
        co2_conversion_factor: float = CO2_CONVERSION_FACTOR,
    ):
        self.discount_weight = discount_factor
        self.max_discount_factor = max_discount_factor
        self.co2_conversion_factor = co2_conversion_factor

    def discount_factor(self, inputs: CarbonInputs) -> Number:
        ratio = _purchase_ratio(inputs.renewable_energy_purchased, inputs.total_energy_use)
        return min(self.max_discount_factor, self.discount_weight * ratio)

    def calculate(self, inputs: CarbonInputs) -> Number:
        discount = self.discount_factor(inputs)
        adjusted = (inputs.total_co2_equivalents_emissions - inputs.carbon_credit_value) * (1 - discount)
        offset = self.co2_conversion_factor * inputs.renewable_energy_produced
        score = adjusted - offset
        logger.debug("Carbon score %s (discount=%s, offset=%s)", score, discount, offset)
        return score


class EsgCompositeScorer:
    """Unweighted mean of the three ESG sub-scores, rounded."""

    def __init__(self, precision: int = DEFAULT_ESG_PRECISION):
        if precision < 0:
            raise ValueError(f"precision must be non-negative, got {precision}")
        self.precision = precision

    def score(self, inputs: EsgInputs, precision: Optional[int] = None) -> float:
        digits = self.precision if precision is None else precision
        if digits < 0:
            raise ValueError(f"precision must be non-negative, got {digits}")
        total = inputs.environmental + inputs.social + inputs.governance
        return round(total / 3, digits)


_carbon = CarbonScoreCalculator()
_esg = EsgCompositeScorer()


def discount_factor(inputs: CarbonInputs) -> Number:
    """Effective purchase discount, never above ``MAX_DISCOUNT_FACTOR``."""
    return _carbon.discount_factor(inputs)


def calculate_carbon_score(inputs: CarbonInputs) -> Number:
    """Score one entity with the standard factors. Raises InvalidDivisor on zero energy use."""
    return _carbon.calculate(inputs)


def calculate_esg_score(inputs: EsgInputs, precision: int = DEFAULT_ESG_PRECISION) -> float:
    """Mean of the three sub-scores rounded to ``precision`` digits. Raises ValueError if negative."""
    return _esg.score(inputs, precision)


# ─── Known-answer vectors ────────────────────────────────────────────────────


class KnownAnswer(NamedTuple):
    description: str
    inputs: CarbonInputs
    expected: Number


KNOWN_ANSWERS: tuple[KnownAnswer, ...] = (
    KnownAnswer(
        description="over max discount factor",
        inputs=CarbonInputs(
            total_energy_use=1000,
            total_co2_equivalents_emissions=25,
            renewable_energy_purchased=10,
            renewable_energy_produced=20,
            carbon_credit_value=50,
        ),
        expected=-35,
    ),
    KnownAnswer(
        description="under max discount factor",
        inputs=CarbonInputs(
            total_energy_use=100,
            total_co2_equivalents_emissions=10,
            renewable_energy_purchased=5,
            renewable_energy_produced=20,
            carbon_credit_value=50,
        ),
        expected=-50,
    ),
)


def run_self_check(
    calculator: Optional[CarbonScoreCalculator] = None,
    vectors: Iterable[KnownAnswer] = KNOWN_ANSWERS,
) -> None:
    """Verify the calculator against the known-answer vectors.

    Raises SelfCheckFailure on the first vector that does not reproduce.
    """
    calculator = calculator or _carbon
    checked = 0
    for vector in vectors:
        actual = calculator.calculate(vector.inputs)
        if actual != vector.expected:
            raise SelfCheckFailure(vector.description, vector.expected, actual)
        checked += 1
    logger.info("Carbon self-check passed (%d vectors)", checked)
