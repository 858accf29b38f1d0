"""
Section normalization and canonical ordering.

Maps a free-form list of contract sections (AI output or manual entry) onto the
section order defined by the contract type's blueprint. Everything here is a
pure function over in-memory lists; persistence is left to the caller.
"""

import logging
from typing import Dict, List, Optional, Sequence, Union

from schemas import ContractType, OrderedSection, Section

log = logging.getLogger("venuecontract.ordering")

# Rank given to titles that are not in the blueprint; keeps them after every match
SENTINEL_RANK = 999


# ---------- Title normalization ----------

def comparison_key(title: str) -> str:
    """Key used to match a title against blueprint entries."""
    return title.lower().strip()


def to_title_case(title: str) -> str:
    """
    Lowercase the title, then capitalize the first character of each
    space-separated word. Runs of spaces are preserved.
    """
    return " ".join(word[:1].upper() + word[1:] for word in title.lower().split(" "))


# ---------- Deduplication ----------

def deduplicate_titles(sections: Sequence[Section]) -> List[Section]:
    """
    Suffix repeated titles with " (N)" where N is the occurrence number.

    The first occurrence keeps its title. If a suffixed name is already taken
    (e.g. the input literally contains "Notes (2)"), N keeps counting up.
    """
    counts: Dict[str, int] = {}
    emitted = set()
    out: List[Section] = []

    for section in sections:
        base = section.title.strip()
        count = counts.get(base, 0) + 1
        counts[base] = count

        title = base
        if count > 1 or base in emitted:
            n = max(count, 2)
            while f"{base} ({n})" in emitted:
                n += 1
            title = f"{base} ({n})"

        emitted.add(title)
        out.append(section if title == section.title else section.model_copy(update={"title": title}))
    return out


# ---------- Canonical order ----------

def build_canonical_order_map(blueprint_sections: Sequence[str]) -> Dict[str, int]:
    # 1-based: first blueprint entry is rank 1
    return {comparison_key(name): idx for idx, name in enumerate(blueprint_sections, start=1)}


def canonical_rank(title: str, order_map: Dict[str, int]) -> int:
    return order_map.get(comparison_key(title), SENTINEL_RANK)


# ---------- Exhibits ----------

def merge_exhibits(
    sections: Sequence[Section],
    exhibits: Optional[Sequence[Section]] = None,
) -> List[Section]:
    """
    Append exhibits after the primary sections.

    Exhibits whose title does not already start with "Exhibit" are lettered
    by position: "Exhibit A: <title>", "Exhibit B: <title>", ...
    """
    if not exhibits:
        return list(sections)

    lettered = []
    for idx, exhibit in enumerate(exhibits):
        title = exhibit.title
        if not title.startswith("Exhibit"):
            title = f"Exhibit {chr(65 + idx)}: {title}"
        lettered.append(Section(title=title, body=exhibit.body))

    return [*sections, *lettered]


# ---------- Orchestrator ----------

def normalize_and_order_sections(
    sections: Sequence[Section],
    contract_type: Union[ContractType, str],
    registry,
) -> List[OrderedSection]:
    """
    Normalize, deduplicate and reorder sections for a contract type.

    Args:
        sections: Sections in arbitrary order. Merge exhibits beforehand
            (see merge_exhibits) if they should take part in ordering.
        contract_type: Key into the blueprint registry.
        registry: BlueprintRegistry supplying the canonical order.

    Returns:
        List[OrderedSection]: Sections in blueprint order with contiguous
        0-based ``order`` values. Titles that match no blueprint entry keep
        their relative input order at the end.
    """
    blueprint = registry.get(contract_type)
    order_map = build_canonical_order_map(blueprint.sections)

    normalized = [
        Section(title=to_title_case(s.title.strip()), body=s.body.strip())
        for s in sections
    ]
    deduplicated = deduplicate_titles(normalized)

    # sorted() is stable, so unmatched sections keep their input order
    ranked = sorted(deduplicated, key=lambda s: canonical_rank(s.title, order_map))

    matched = sum(1 for s in ranked if canonical_rank(s.title, order_map) != SENTINEL_RANK)
    log.debug(
        "Ordered %d sections for %s (%d matched blueprint, %d appended)",
        len(ranked), blueprint.type.value, matched, len(ranked) - matched,
    )

    return [
        OrderedSection(title=s.title, body=s.body, order=idx)
        for idx, s in enumerate(ranked)
    ]
