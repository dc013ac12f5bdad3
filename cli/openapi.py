"""CLI wrapper: Write the OpenAPI document to a JSON file."""

from __future__ import annotations

import argparse
import json
from pathlib import Path


def main() -> None:
    parser = argparse.ArgumentParser(prog="openapi")
    parser.add_argument("--output", default="docs/openapi.json", help="destination file")
    args = parser.parse_args()

    from app.main import app

    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(json.dumps(app.openapi(), indent=2) + "\n", encoding="utf-8")
    print(f"Wrote {output}")
