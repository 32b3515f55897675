"""
JSON Schema generator for the scenario request model.

Front ends use the schema to build and validate scenario forms.
"""

import json
from pathlib import Path
from typing import Any, Dict

from .scenario import MortgageScenarioRequest


def generate_scenario_request_schema() -> Dict[str, Any]:
    """Generate JSON schema for the MortgageScenarioRequest model."""
    return MortgageScenarioRequest.model_json_schema()


def save_scenario_request_schema(output_path: Path) -> None:
    """Save the scenario request JSON schema to a file."""
    schema = generate_scenario_request_schema()

    schema.update(
        {
            "$schema": "http://json-schema.org/draft-07/schema#",
            "title": "Mortgage Scenario Request Schema v0.1",
            "description": "Schema for mortgage scenario runs: loan terms, past prepayments, as-of date and future extra-payment scenarios",
        }
    )

    with open(output_path, "w") as f:
        json.dump(schema, f, indent=2)


if __name__ == "__main__":
    schema_path = Path(__file__).parent.parent.parent / "schema" / "scenario_request_v0_1.json"
    schema_path.parent.mkdir(parents=True, exist_ok=True)
    save_scenario_request_schema(schema_path)
    print(f"Schema saved to {schema_path}")
