"""Pytest configuration and fixtures."""

import pytest
import tempfile
import json
from pathlib import Path


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def sample_order():
    """Order document with one list of line items."""
    return {
        "order_id": 1001,
        "customer": {
            "name": "Alice",
            "address": {"city": "New York", "zip": "10001"}
        },
        "items": [
            {"sku": "A-1", "qty": 2},
            {"sku": "B-7", "qty": 1},
            {"sku": "C-3", "qty": 5}
        ]
    }


@pytest.fixture
def sample_tagged_record():
    """Record with two independent lists, tags and regions."""
    return {
        "id": "rec-1",
        "tags": ["red", "blue"],
        "regions": ["eu", "us"]
    }


@pytest.fixture
def sample_records():
    """List of heterogeneous records as a JSON Lines source would yield."""
    return [
        {"id": 1, "name": "Item 1", "labels": ["new"]},
        {"id": 2, "name": "Item 2", "labels": ["sale", "clearance"]},
        {"id": 3, "price": 9.5}
    ]


@pytest.fixture
def order_file(temp_dir, sample_order):
    """Order document written to disk."""
    path = temp_dir / "order.json"
    path.write_text(json.dumps(sample_order), encoding="utf-8")
    return path


@pytest.fixture
def records_file(temp_dir, sample_records):
    """Records written to disk as JSON Lines."""
    path = temp_dir / "records.jsonl"
    path.write_text("\n".join(json.dumps(record) for record in sample_records) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def make_nested():
    """Factory for a mapping nested ``depth`` levels deep."""
    def build(depth):
        data = {"leaf": 1}
        for i in range(depth - 1):
            data = {f"level_{i}": data}
        return data
    return build
