"""Pydantic data models: the calculator inputs and the batch record.

Calculator inputs are strict: only real ``int``/``float`` values pass, and
integers stay integers so the purchase ratio can follow the operand types.
Coercion of loosely-typed values happens in ``CarbonRecord`` only.
"""

from __future__ import annotations

from typing import Annotated, Union

from pydantic import AllowInfNan, BaseModel, BeforeValidator, ConfigDict, Field, FiniteFloat, Strict, StrictInt


def _reject_bool(value: object) -> object:
    # lax int would read JSON true/false as 1/0
    if isinstance(value, bool):
        raise ValueError("expected a number, got a boolean")
    return value


StrictNumber = Union[StrictInt, Annotated[float, Strict(), AllowInfNan(False)]]
LaxNumber = Annotated[Union[int, FiniteFloat], BeforeValidator(_reject_bool)]


class CarbonInputs(BaseModel):
    """The five figures needed to score one entity's carbon liability."""

    model_config = ConfigDict(frozen=True)

    total_energy_use: StrictNumber = Field(description="Denominator of the purchase ratio, must be non-zero")
    total_co2_equivalents_emissions: StrictNumber
    renewable_energy_purchased: StrictNumber
    renewable_energy_produced: StrictNumber
    carbon_credit_value: StrictNumber = Field(description="Subtracted from emissions before discounting")


class EsgInputs(BaseModel):
    """Environmental, social and governance sub-scores, each a fraction in [0, 1].

    The range is enforced by the owning record (see ``holders.EsgScoreRecord``),
    not here.
    """

    model_config = ConfigDict(frozen=True)

    environmental: StrictNumber
    social: StrictNumber
    governance: StrictNumber


class CarbonRecord(BaseModel):
    """One element of a batch input file."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    isin: str = Field(alias="ISIN", description="Pass-through identifier, not used in calculation")
    total_energy_use: LaxNumber = Field(alias="Total Energy Use")
    total_co2_equivalents_emissions: LaxNumber = Field(alias="Total CO2 Equivalents Emissions")
    renewable_energy_purchased: LaxNumber = Field(alias="Renewable Energy Purchased")
    renewable_energy_produced: LaxNumber = Field(alias="Renewable Energy Produced")
    carbon_credit_value: LaxNumber = Field(alias="Carbon Credit Value")

    def inputs(self) -> CarbonInputs:
        return CarbonInputs(
            total_energy_use=self.total_energy_use,
            total_co2_equivalents_emissions=self.total_co2_equivalents_emissions,
            renewable_energy_purchased=self.renewable_energy_purchased,
            renewable_energy_produced=self.renewable_energy_produced,
            carbon_credit_value=self.carbon_credit_value,
        )
