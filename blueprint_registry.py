# blueprint_registry.py
"""
Blueprint registry: one canonical section layout per contract type.

Blueprints live as YAML files (one per contract type) and are loaded once at
startup into a read-only BlueprintRegistry that gets passed to whoever needs
it. The registry must cover every ContractType exactly once.
"""
from __future__ import annotations
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

import yaml
from pydantic import ValidationError

from schemas import Blueprint, ContractType, ContractTypeOption
from section_ordering import SENTINEL_RANK, comparison_key
from settings import settings

log = logging.getLogger("venuecontract.blueprints")

REQUIRED_FIELDS = {
    "type": str,
    "display_name": str,
    "sections": list,
}

OPTIONAL_FIELDS = {
    "description": str,
    "specific_instructions": str,
}


class BlueprintRegistryError(RuntimeError):
    """Blueprint data is malformed or does not cover every contract type."""


class BlueprintRegistry:
    """Read-only lookup of blueprints by contract type."""

    def __init__(self, blueprints: Mapping[ContractType, Blueprint]):
        missing = [t.value for t in ContractType if t not in blueprints]
        if missing:
            raise BlueprintRegistryError(f"No blueprint for contract type(s): {', '.join(missing)}")
        # keep enum declaration order so listings are stable
        self._blueprints = MappingProxyType({t: blueprints[t] for t in ContractType})

    def get(self, contract_type: Union[ContractType, str]) -> Blueprint:
        """
        Return the blueprint for a contract type.

        An unknown key is a caller bug: contract types are validated against
        the enum before they get here, so this raises KeyError.
        """
        try:
            key = ContractType(contract_type)
        except ValueError:
            raise KeyError(f"Unknown contract type: {contract_type!r}") from None
        return self._blueprints[key]

    def contract_types(self) -> List[ContractTypeOption]:
        return [
            ContractTypeOption(value=bp.type, label=bp.display_name, description=bp.description)
            for bp in self._blueprints.values()
        ]

    def __iter__(self):
        return iter(self._blueprints.values())

    def __len__(self) -> int:
        return len(self._blueprints)


# ---------- YAML validation ----------

def validate_blueprint_structure(raw: Dict[str, Any]) -> List[str]:
    """Validate one parsed YAML blueprint against the expected shape."""
    errors = []

    for field, expected_type in REQUIRED_FIELDS.items():
        if field not in raw:
            errors.append(f"Missing required field: {field}")
        elif not isinstance(raw[field], expected_type):
            errors.append(f"Field '{field}' should be {expected_type.__name__}, got {type(raw[field]).__name__}")

    for field, expected_type in OPTIONAL_FIELDS.items():
        if field in raw and raw[field] is not None and not isinstance(raw[field], expected_type):
            errors.append(f"Field '{field}' should be {expected_type.__name__}, got {type(raw[field]).__name__}")

    if isinstance(raw.get("type"), str) and raw["type"] not in ContractType.__members__:
        errors.append(f"Unknown contract type: {raw['type']}")

    sections = raw.get("sections")
    if isinstance(sections, list):
        if not sections:
            errors.append("sections cannot be empty")
        if len(sections) >= SENTINEL_RANK:
            errors.append(f"sections must have fewer than {SENTINEL_RANK} entries")
        seen = set()
        for i, name in enumerate(sections):
            if not isinstance(name, str) or not name.strip():
                errors.append(f"sections[{i}] must be a non-empty string")
                continue
            key = comparison_key(name)
            if key in seen:
                errors.append(f"sections[{i}] duplicates an earlier title: {name}")
            seen.add(key)

    return errors


def _read_blueprint_file(file_path: Path) -> Tuple[Optional[Dict[str, Any]], List[str]]:
    """Parse one blueprint file; returns the mapping (None if unreadable) and its errors."""
    try:
        raw = yaml.safe_load(file_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        return None, [f"YAML parsing error: {e}"]

    if not isinstance(raw, dict):
        return None, ["YAML file is empty or not a mapping"]
    return raw, validate_blueprint_structure(raw)


def validate_blueprint_file(file_path: Path) -> Dict[str, Any]:
    """Validate a single YAML blueprint file."""
    _, errors = _read_blueprint_file(file_path)
    return {
        "file": str(file_path),
        "valid": not errors,
        "errors": errors,
    }


# ---------- Loading ----------

def _load_yaml_file(path: Path) -> Blueprint:
    raw, errors = _read_blueprint_file(path)
    if errors:
        raise BlueprintRegistryError(f"{path.name}: " + "; ".join(errors))

    try:
        return Blueprint(
            type=raw["type"],
            display_name=raw["display_name"],
            description=(raw.get("description") or "").strip(),
            sections=tuple(s.strip() for s in raw["sections"]),
            specific_instructions=(raw.get("specific_instructions") or "").strip(),
        )
    except ValidationError as e:
        raise BlueprintRegistryError(f"{path.name}: {e}") from e


def blueprint_files(dir_path: Union[str, Path]) -> List[Path]:
    d = Path(dir_path)
    return sorted(list(d.glob("*.yml")) + list(d.glob("*.yaml")))


def load_registry(dir_path: Optional[Union[str, Path]] = None) -> BlueprintRegistry:
    """
    Load every blueprint YAML in dir_path into a BlueprintRegistry.

    Raises BlueprintRegistryError if the directory is missing, a file is
    malformed, two files define the same contract type, or a contract type
    has no blueprint.
    """
    directory = settings.get_blueprints_dir(str(dir_path) if dir_path else None)
    if not directory.is_dir():
        raise BlueprintRegistryError(f"Blueprint directory not found: {directory}")

    loaded: Dict[ContractType, Blueprint] = {}
    sources: Dict[ContractType, str] = {}
    for path in blueprint_files(directory):
        bp = _load_yaml_file(path)
        if bp.type in loaded:
            raise BlueprintRegistryError(
                f"Duplicate blueprint for {bp.type.value}: {sources[bp.type]} and {path.name}"
            )
        loaded[bp.type] = bp
        sources[bp.type] = path.name

    registry = BlueprintRegistry(loaded)
    log.info("Loaded %d contract blueprints from %s", len(registry), directory)
    return registry
