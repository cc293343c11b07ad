"""Carbon Analytics MCP Server.

FastMCP server exposing the carbon and ESG calculators as read-only tools.
Run: carbon-analytics-mcp
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional, Union

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from .core.exceptions import SelfCheckFailure
from .core.models import CarbonInputs, EsgInputs
from .core.scoring import (
    DEFAULT_ESG_PRECISION,
    KNOWN_ANSWERS,
    calculate_carbon_score,
    calculate_esg_score,
    discount_factor,
    run_self_check,
)
from .ingestors import evaluate_records, get_data_file, load_carbon_records

logger = logging.getLogger(__name__)

READ_ONLY = ToolAnnotations(readOnlyHint=True, destructiveHint=False, idempotentHint=True, openWorldHint=False)


def _default_precision() -> int:
    return int(os.environ.get("ESG_SCORE_PRECISION", str(DEFAULT_ESG_PRECISION)))


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncIterator[None]:
    """Configure logging and verify the calculator before serving any tool."""
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    run_self_check()
    yield


mcp = FastMCP(
    "Carbon Analytics",
    instructions="Net carbon liability and ESG composite scoring for financial holdings.",
    lifespan=lifespan,
)


# ─── Tool 1: Carbon Score ────────────────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY)
def carbon_score(
    total_energy_use: Union[int, float],
    total_co2_equivalents_emissions: Union[int, float],
    renewable_energy_purchased: Union[int, float],
    renewable_energy_produced: Union[int, float],
    carbon_credit_value: Union[int, float],
) -> dict:
    """Net carbon liability for one entity.

    Emissions less carbon credits, discounted by purchased renewable energy
    (discount capped at 80%), less half the renewable energy produced.

    Args:
        total_energy_use: Total energy use. Must be non-zero.
        total_co2_equivalents_emissions: Measured CO2-equivalent emissions.
        renewable_energy_purchased: Renewable energy purchased, same units as total use.
        renewable_energy_produced: Renewable energy produced.
        carbon_credit_value: Carbon credits subtracted before discounting.
    """
    inputs = CarbonInputs(
        total_energy_use=total_energy_use,
        total_co2_equivalents_emissions=total_co2_equivalents_emissions,
        renewable_energy_purchased=renewable_energy_purchased,
        renewable_energy_produced=renewable_energy_produced,
        carbon_credit_value=carbon_credit_value,
    )
    return {
        "score": calculate_carbon_score(inputs),
        "discount_factor": discount_factor(inputs),
        "inputs": inputs.model_dump(),
    }


# ─── Tool 2: Carbon Batch ────────────────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY)
def carbon_batch(path: str = "") -> dict:
    """Score every record in a JSON batch file, in file order.

    Args:
        path: Path to the batch file. Defaults to $CARBON_DATA_FILE.
    """
    source = path or get_data_file()
    results = [
        {"isin": isin, "score": score}
        for isin, score in evaluate_records(load_carbon_records(source))
    ]
    return {
        "path": str(source),
        "results": results,
        "count": len(results),
        "summary": f"Scored {len(results)} records from {source}",
    }


# ─── Tool 3: ESG Score ───────────────────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY)
def esg_score(environmental: float, social: float, governance: float, precision: Optional[int] = None) -> dict:
    """ESG composite score: the mean of three sub-scores, rounded.

    Args:
        environmental: Environmental sub-score in [0, 1].
        social: Social sub-score in [0, 1].
        governance: Governance sub-score in [0, 1].
        precision: Fractional digits to round to. Defaults to $ESG_SCORE_PRECISION or 8.
    """
    for name, value in (("environmental", environmental), ("social", social), ("governance", governance)):
        if not 0 <= value <= 1:
            raise ValueError(f"{name} must be between 0 and 1, got {value}")

    digits = _default_precision() if precision is None else precision
    inputs = EsgInputs(environmental=environmental, social=social, governance=governance)
    return {
        "score": calculate_esg_score(inputs, digits),
        "precision": digits,
        "inputs": inputs.model_dump(),
    }


# ─── Tool 4: Self-Check ──────────────────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY)
def carbon_self_check() -> dict:
    """Re-run the carbon calculator's known-answer checks."""
    try:
        run_self_check()
    except SelfCheckFailure as exc:
        logger.error("Self-check failed: %s", exc)
        return {
            "passed": False,
            "failure": exc.description,
            "expected": exc.expected,
            "actual": exc.actual,
            "summary": str(exc),
        }
    return {
        "passed": True,
        "vectors": [v.description for v in KNOWN_ANSWERS],
        "summary": f"All {len(KNOWN_ANSWERS)} known-answer checks passed.",
    }


def main():
    """Entry point for the CLI command."""
    mcp.run()


if __name__ == "__main__":
    main()
