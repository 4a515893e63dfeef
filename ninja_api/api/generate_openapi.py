"""
Export the OpenAPI document of the service to interfaces/openapi.json.

Usage:
    python -m ninja_api.api.generate_openapi
"""

import json
import os

from ninja_api.api.main import app
from ninja_api.schemas.common import ProblemDetail


def build_openapi_schema() -> dict:
    """Return the app's OpenAPI schema with the shared problem responses registered."""
    openapi_schema = app.openapi()

    # Reusable error responses, referenced by clients generating SDKs
    problem_ref = {"$ref": "#/components/schemas/ProblemDetail"}
    content = {"application/problem+json": {"schema": problem_ref}}
    components = openapi_schema.setdefault("components", {})
    components.setdefault("schemas", {}).setdefault(
        "ProblemDetail", ProblemDetail.model_json_schema(ref_template="#/components/schemas/{model}")
    )
    components["responses"] = {
        "BadRequestResponse": {"description": "Invalid request data", "content": content},
        "NotFoundResponse": {"description": "Resource not found", "content": content},
        "InternalServerErrorResponse": {"description": "Internal server error", "content": content},
    }
    return openapi_schema


def main(output_dir: str = "interfaces") -> str:
    os.makedirs(output_dir, exist_ok=True)
    output_path = os.path.join(output_dir, "openapi.json")
    with open(output_path, "w") as f:
        json.dump(build_openapi_schema(), f, indent=2)
    return output_path


if __name__ == "__main__":
    print(main())
