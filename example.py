#!/usr/bin/env python3
"""
Example usage of the JSON Exploder.

This script demonstrates how to use the JSON Exploder to turn a nested
JSON document into flat rows and write them as CSV.
"""

import json
import tempfile
from pathlib import Path
from json_exploder import JSONExploder, ExplodeOptions


def main():
    """Main example function."""
    print("JSON Exploder Example")
    print("=" * 50)

    # Create sample data
    sample_data = {
        "store": "Downtown",
        "manager": {
            "name": "Alice Johnson",
            "contact": {"email": "alice@example.com", "phone": "555-0100"}
        },
        "orders": [
            {
                "id": 1,
                "customer": "Bob",
                "lines": [
                    {"sku": "A-1", "qty": 2},
                    {"sku": "B-7", "qty": 1}
                ]
            },
            {
                "id": 2,
                "customer": "Carol",
                "lines": [
                    {"sku": "C-3", "qty": 5}
                ]
            }
        ],
        "open_days": ["mon", "tue", "wed"]
    }

    json_string = json.dumps(sample_data, indent=2)
    print(f"Original JSON size: {len(json_string)} characters\n")

    # Sibling lists "orders" and "open_days" multiply: 3 order lines x 3 days
    exploder = JSONExploder(options=ExplodeOptions(max_rows=1000))

    result = exploder.explode(json_string)
    if not result.success:
        print("❌ Failed to explode JSON")
        for error in result.errors or []:
            print(f"   Error: {error}")
        return

    print("✅ Success!")
    print(f"   Rows: {result.row_count}")
    print(f"   Columns: {', '.join(result.columns)}")
    print("\nFirst rows:")
    for row in result.rows[:3]:
        print(f"   {row}")

    with tempfile.TemporaryDirectory() as temp_dir:
        output_path = Path(temp_dir) / "orders.csv"
        write_result = exploder.explode_file(str(_write_input(temp_dir, sample_data)), str(output_path))

        if write_result.success:
            print(f"\nWrote {write_result.row_count} rows to {output_path.name}:")
            print(output_path.read_text(encoding="utf-8")[:400])
        else:
            print(f"❌ Failed to write CSV: {write_result.errors}")

    print(exploder.profiler.export_metrics("summary"))


def _write_input(temp_dir: str, data) -> Path:
    input_path = Path(temp_dir) / "orders.json"
    input_path.write_text(json.dumps(data), encoding="utf-8")
    return input_path


if __name__ == "__main__":
    main()
