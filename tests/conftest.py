"""Pytest configuration and fixtures."""

import json
from pathlib import Path
from typing import Any, Dict

import pytest


@pytest.fixture
def sample_object() -> Dict[str, Any]:
    """Flat object with one field of each primitive kind."""
    return {"id": 123, "name": "Ada", "active": True}


@pytest.fixture
def sample_tabular() -> Dict[str, Any]:
    """Object holding a uniform array of flat objects."""
    return {
        "users": [
            {"name": "Alice", "id": 1, "role": "admin"},
            {"name": "Bob", "id": 2, "role": "user"},
        ]
    }


@pytest.fixture
def sample_nested() -> Dict[str, Any]:
    """Value tree exercising every array shape and nesting position."""
    return {
        "id": 7,
        "name": "Widget, deluxe",
        "price": 19.99,
        "active": True,
        "notes": None,
        "tags": ["a", "b c", "true", "42", "", "x|y"],
        "dims": {"w": 1.5, "h": 2, "unit": "cm"},
        "users": [
            {"id": 1, "name": "Alice"},
            {"id": 2, "name": "Bob|Pipe"},
        ],
        "mixed": [1, "two", {"three": 3, "four": [4, 4]}, [5, 6], [], {}],
        "matrix": [[1, 2], [3, 4]],
        "text": "line1\nline2\ttab",
        "first name": "quoted key",
        "empty": [],
        "deep": {"a": {"b": {"c": [{"x": 1, "y": {"z": True}}]}}},
        "numbers": [-1, -2.5, 1e-07, 12345678901234567890],
        "records": [
            {"meta": {"k": "v"}, "rows": [{"a": 1, "b": 2}, {"a": 3, "b": 4}], "n": 0},
            {"tags": ["p", "q"], "n": 1},
        ],
    }


@pytest.fixture
def json_file(tmp_path: Path, sample_tabular) -> Path:
    """JSON document written to a temporary file."""
    path = tmp_path / "input.json"
    path.write_text(json.dumps(sample_tabular), encoding="utf-8")
    return path


@pytest.fixture
def toon_file(tmp_path: Path) -> Path:
    """TOON document written to a temporary file."""
    path = tmp_path / "input.toon"
    path.write_text("items[2]{sku,qty}:\nA1,2\nB2,1", encoding="utf-8")
    return path
