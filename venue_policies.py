"""
Venue policies: org-level default policies folded into a single section.

An organization keeps default weather, alcohol and liability wording plus any
number of custom policies. Each one lists the contract types it applies to;
when a template or contract is created for one of those types the matching
policies are combined into a "Venue Policies" section placed ahead of the
governing law section.
"""

import logging
from typing import List, Optional, Sequence, Union

from schemas import ContractType, OrderedSection, OrgContractDefaults, Section, VenuePolicy
from section_editing import insert_section, renumber_sections

log = logging.getLogger("venuecontract.venue_policies")

VENUE_POLICIES_TITLE = "Venue Policies"


def _type_name(contract_type: Union[ContractType, str]) -> str:
    return contract_type.value if isinstance(contract_type, ContractType) else str(contract_type)


def policy_applies_to_type(applies_to: Optional[Sequence[str]], contract_type: Union[ContractType, str]) -> bool:
    # Policies must be explicitly assigned; an empty list applies to nothing
    if not applies_to:
        return False
    return _type_name(contract_type) in applies_to


def get_applicable_venue_policies(
    defaults: Optional[OrgContractDefaults],
    contract_type: Union[ContractType, str],
) -> List[VenuePolicy]:
    """
    Policies that apply to a contract type, in stable order:
    Weather, Alcohol, Liability, then custom policies as stored.
    """
    if defaults is None:
        return []

    policies: List[VenuePolicy] = []
    builtin = [
        ("Weather Policy", defaults.default_weather_policy, defaults.weather_policy_applies_to),
        ("Alcohol Policy", defaults.default_alcohol_policy, defaults.alcohol_policy_applies_to),
        ("Liability Terms", defaults.default_liability_terms, defaults.liability_terms_applies_to),
    ]
    for title, content, applies_to in builtin:
        if content and content.strip() and policy_applies_to_type(applies_to, contract_type):
            policies.append(VenuePolicy(title=title, content=content.strip()))

    for cp in defaults.custom_policies:
        if cp.name.strip() and cp.content.strip() and policy_applies_to_type(cp.applies_to, contract_type):
            policies.append(VenuePolicy(title=cp.name.strip(), content=cp.content.strip()))

    return policies


def build_venue_policies_section_body(policies: Sequence[VenuePolicy]) -> str:
    """Each policy as its title, a blank line, then its content; policies separated by a blank line."""
    return "\n\n".join(f"{p.title}\n\n{p.content}" for p in policies)


def inject_venue_policies_section(
    sections: Sequence[OrderedSection],
    defaults: Optional[OrgContractDefaults],
    contract_type: Union[ContractType, str],
) -> List[OrderedSection]:
    """
    Insert a "Venue Policies" section before the first section whose title
    mentions governing law (or at the end if there is none). Returns the
    sections renumbered; unchanged apart from renumbering when nothing applies
    or a venue policies section is already present.
    """
    current = renumber_sections(sections)
    if any("venue policies" in s.title.lower() for s in current):
        log.debug("Venue policies section already present; skipping injection")
        return current

    policies = get_applicable_venue_policies(defaults, contract_type)
    if not policies:
        return current

    position = next(
        (s.order for s in current if "governing law" in s.title.lower()),
        len(current),
    )
    body = build_venue_policies_section_body(policies)
    log.info(
        "Injecting %d venue policies for %s at position %d",
        len(policies), _type_name(contract_type), position,
    )
    return insert_section(current, Section(title=VENUE_POLICIES_TITLE, body=body), position)
