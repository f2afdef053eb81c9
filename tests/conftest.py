"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from typing import Any

import pytest


@pytest.fixture
def tagged_schema() -> dict[str, Any]:
    """Schema with a primitive, a binary blob and a primitive list."""
    return {"id": "uint16", "name": "binary", "tags": ["uint8"]}


@pytest.fixture
def tagged_value() -> dict[str, Any]:
    """Value matching tagged_schema."""
    return {"id": 7, "name": b"ABC", "tags": [1, 2, 3]}


@pytest.fixture
def fleet_schema() -> dict[str, Any]:
    """Records inside lists inside records, four levels deep."""
    return {
        "fleet": {
            "name": "binary",
            "ships": [
                {
                    "id": "uint16",
                    "speed": "float",
                    "crew": [{"name": "binary", "rank": "int8", "skills": ["uint8"]}],
                }
            ],
        },
        "active": "bool",
    }


@pytest.fixture
def fleet_value() -> dict[str, Any]:
    """Value matching fleet_schema."""
    return {
        "fleet": {
            "name": b"Blue",
            "ships": [
                {
                    "id": 1,
                    "speed": 12.5,
                    "crew": [
                        {"name": b"Ada", "rank": -3, "skills": [1, 2]},
                        {"name": b"Bo", "rank": 100, "skills": []},
                    ],
                },
                {"id": 65535, "speed": -0.25, "crew": []},
            ],
        },
        "active": True,
    }
