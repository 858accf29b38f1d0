"""Shared fixtures for the section ordering tests."""
from __future__ import annotations

from pathlib import Path

import pytest

from blueprint_registry import BlueprintRegistry, load_registry
from schemas import Blueprint, ContractType

BLUEPRINTS_DIR = Path(__file__).resolve().parent.parent / "blueprints"


@pytest.fixture(scope="session")
def registry() -> BlueprintRegistry:
    return load_registry(BLUEPRINTS_DIR)


@pytest.fixture
def tiny_registry() -> BlueprintRegistry:
    """Every contract type shares a three-entry blueprint."""
    return BlueprintRegistry({
        t: Blueprint(
            type=t,
            display_name=t.value.title(),
            sections=("Parties", "Payment Terms", "Signatures"),
        )
        for t in ContractType
    })
