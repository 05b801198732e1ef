"""
Utility script to generate and write the OpenAPI schema for the FastAPI app.

Frontend clients can consume the schema without running the server (and
without a database: the app is built but its lifespan never runs).

Usage:
    python -m todo_api.generate_openapi [output_path]

The default output path is interfaces/openapi.json under the current directory.
"""
from __future__ import annotations

import json
import os
import sys
from typing import Optional

from .main import create_app

DEFAULT_OUTPUT = os.path.join("interfaces", "openapi.json")


# PUBLIC_INTERFACE
def generate_openapi(out_path: Optional[str] = None) -> str:
    """Write the OpenAPI schema to out_path (creating directories) and return the path."""
    out_path = out_path or DEFAULT_OUTPUT
    schema = create_app().openapi()

    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(schema, f, indent=2, ensure_ascii=False)
    return out_path


def main() -> None:
    path = generate_openapi(sys.argv[1] if len(sys.argv) > 1 else None)
    print(f"Wrote OpenAPI schema to: {path}")


if __name__ == "__main__":
    main()
