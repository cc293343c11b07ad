# tests/conftest.py

"""
Shared fixtures: calculator inputs and batch records used across test modules.
"""

import json

import pytest

from carbon_analytics.core.models import CarbonInputs, EsgInputs


@pytest.fixture
def over_max_inputs():
    """First known-answer vector, expected score -35."""
    return CarbonInputs(
        total_energy_use=1000,
        total_co2_equivalents_emissions=25,
        renewable_energy_purchased=10,
        renewable_energy_produced=20,
        carbon_credit_value=50,
    )


@pytest.fixture
def under_max_inputs():
    """Second known-answer vector, expected score -50."""
    return CarbonInputs(
        total_energy_use=100,
        total_co2_equivalents_emissions=10,
        renewable_energy_purchased=5,
        renewable_energy_produced=20,
        carbon_credit_value=50,
    )


@pytest.fixture
def esg_inputs():
    return EsgInputs(environmental=0.8, social=0.3, governance=0.6)


@pytest.fixture
def batch_payload():
    return [
        {
            "ISIN": "US0378331005",
            "Total Energy Use": 1000,
            "Total CO2 Equivalents Emissions": 25,
            "Renewable Energy Purchased": 10,
            "Renewable Energy Produced": 20,
            "Carbon Credit Value": 50,
        },
        {
            "ISIN": "US38259P5089",
            "Total Energy Use": 100.0,
            "Total CO2 Equivalents Emissions": 100.0,
            "Renewable Energy Purchased": 50.0,
            "Renewable Energy Produced": 10.0,
            "Carbon Credit Value": 20.0,
        },
        {
            "ISIN": "ETF",
            "Total Energy Use": 10.0,
            "Total CO2 Equivalents Emissions": 60.0,
            "Renewable Energy Purchased": 40.0,
            "Renewable Energy Produced": 0.0,
            "Carbon Credit Value": 10.0,
        },
    ]


@pytest.fixture
def batch_file(tmp_path, batch_payload):
    path = tmp_path / "data.json"
    path.write_text(json.dumps(batch_payload), encoding="utf-8")
    return path
