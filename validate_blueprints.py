#!/usr/bin/env python3
"""
Blueprint YAML Validation Script
Validates every YAML file in the blueprints directory and checks that each
contract type is covered exactly once.
"""

import sys
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from blueprint_registry import blueprint_files, validate_blueprint_file
from schemas import ContractType
from settings import settings


def coverage_errors(files: List[Path]) -> List[str]:
    """Contract types missing from, or defined twice in, the given files."""
    seen: Dict[str, str] = {}
    errors = []
    for path in files:
        try:
            raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError:
            continue  # already reported per file
        kind = raw.get("type") if isinstance(raw, dict) else None
        if not isinstance(kind, str):
            continue
        if kind in seen:
            errors.append(f"{kind} defined in both {seen[kind]} and {path.name}")
        seen[kind] = path.name

    for t in ContractType:
        if t.value not in seen:
            errors.append(f"No blueprint for contract type {t.value}")
    return errors


def main(argv: Optional[List[str]] = None) -> int:
    """Main validation function."""
    args = sys.argv[1:] if argv is None else argv
    blueprints_dir = settings.get_blueprints_dir(args[0] if args else None)

    if not blueprints_dir.exists():
        print(f"ERROR: Blueprint directory not found: {blueprints_dir}")
        return 1

    files = blueprint_files(blueprints_dir)
    if not files:
        print(f"No YAML files found in {blueprints_dir}")
        return 1

    print(f"Validating {len(files)} blueprint files...")
    print("=" * 60)

    results = []
    for path in files:
        result = validate_blueprint_file(path)
        results.append(result)

        status = "VALID" if result["valid"] else "INVALID"
        print(f"{status}: {path.name}")
        for error in result["errors"]:
            print(f"  ERROR: {error}")

    coverage = coverage_errors(files)
    for error in coverage:
        print(f"COVERAGE ERROR: {error}")

    print("=" * 60)
    valid_count = sum(1 for r in results if r["valid"])
    print(f"SUMMARY: {valid_count}/{len(results)} files are valid")

    if valid_count == len(results) and not coverage:
        print("All blueprints are valid!")
        return 0
    print("Some blueprints have validation errors")
    return 1


if __name__ == "__main__":
    sys.exit(main())
