# section_editing.py
import re
from typing import List, Optional, Sequence

from schemas import OrderedSection, Section

VARIABLE_PATTERN = re.compile(r"\{\{([^}]+)\}\}")

def extract_variables(text: str) -> List[str]:
    """Unique {{variable}} names in first-seen order."""
    seen: List[str] = []
    for m in VARIABLE_PATTERN.finditer(text or ""):
        name = m.group(1).strip()
        if name and name not in seen:
            seen.append(name)
    return seen

def renumber_sections(sections: Sequence[OrderedSection]) -> List[OrderedSection]:
    """
    Sort by the current order value and reassign 0..n-1 so there are no gaps.
    Ties keep their list position.
    """
    ranked = sorted(sections, key=lambda s: s.order)
    return [s.model_copy(update={"order": idx}) for idx, s in enumerate(ranked)]

def reorder_sections(sections: Sequence[OrderedSection], new_order: Sequence[int]) -> List[OrderedSection]:
    """
    Apply an explicit ordering. new_order lists indices into ``sections``,
    in the position each should take; it must be a permutation of range(n).
    """
    if sorted(new_order) != list(range(len(sections))):
        raise ValueError(
            f"new_order must be a permutation of 0..{len(sections) - 1}, got {list(new_order)}"
        )
    return [
        sections[src].model_copy(update={"order": idx})
        for idx, src in enumerate(new_order)
    ]

def insert_section(
    sections: Sequence[OrderedSection],
    section: Section,
    position: Optional[int] = None,
) -> List[OrderedSection]:
    """Insert ``section`` at ``position`` (default: end) and renumber."""
    current = renumber_sections(sections)
    if position is None or position > len(current):
        position = len(current)
    if position < 0:
        raise ValueError(f"position must be non-negative, got {position}")

    new = OrderedSection(title=section.title, body=section.body, order=position)
    merged = list(current[:position]) + [new] + list(current[position:])
    return [s.model_copy(update={"order": idx}) for idx, s in enumerate(merged)]
