"""
Turn a validated AI contract response into ordered, persist-ready sections.

The generation flows call the model elsewhere; this module only checks the
shape of what came back and runs it through exhibit merging, blueprint
ordering and venue policy injection.
"""

import json
import logging
import re
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from schemas import AIContractResponse, AssembledContract, ContractType, OrgContractDefaults, Section
from section_ordering import merge_exhibits, normalize_and_order_sections
from venue_policies import inject_venue_policies_section

log = logging.getLogger("venuecontract.assembly")


class InvalidAIResponseError(ValueError):
    """The AI response is not JSON or does not match the expected contract shape."""


def _extract_json_block(text: str) -> str | None:
    """
    Extract the JSON object from a model response that may carry extra text.

    Handles "```json\\n{...}\\n```" fences and prose before/after the object.

    Returns:
        JSON string (just the {...} part) or None if not found
    """
    if not text:
        return None

    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = cleaned.strip("`").strip()
        if cleaned.startswith("json"):
            cleaned = cleaned[4:].strip()

    m = re.search(r"\{.*\}", cleaned, re.DOTALL)
    if not m:
        return None
    return m.group(0)


def _remove_trailing_commas(text: str) -> str:
    return re.sub(r",\s*([}\]])", r"\1", text)


def _loads_ai_json(raw: str) -> Dict[str, Any]:
    block = _extract_json_block(raw)
    if block is None:
        raise InvalidAIResponseError("AI response does not contain a JSON object")

    try:
        return json.loads(block)
    except json.JSONDecodeError as e1:
        log.debug(f"Direct JSON parse failed: {e1}")

    try:
        result = json.loads(_remove_trailing_commas(block))
        log.info("AI response parsed after trailing comma cleanup")
        return result
    except json.JSONDecodeError as e2:
        log.error(f"Failed to parse AI response JSON: {e2} (line {e2.lineno}, column {e2.colno})")
        raise InvalidAIResponseError(f"AI response is not valid JSON: {e2}") from e2


def parse_ai_contract_response(raw: Union[str, bytes, Dict[str, Any]]) -> AIContractResponse:
    """
    Validate an AI contract response.

    Args:
        raw: Model output as text (optionally fenced) or an already-decoded dict.

    Returns:
        AIContractResponse

    Raises:
        InvalidAIResponseError: If the text is not JSON or the shape is wrong
    """
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")
    data = _loads_ai_json(raw) if isinstance(raw, str) else raw

    if not isinstance(data, dict):
        raise InvalidAIResponseError(f"AI response must be a JSON object, got {type(data).__name__}")

    try:
        return AIContractResponse.model_validate(data)
    except ValidationError as e:
        raise InvalidAIResponseError(f"AI response failed validation: {e}") from e


def assemble_contract_sections(
    response: AIContractResponse,
    contract_type: Union[ContractType, str],
    registry,
    org_defaults: Optional[OrgContractDefaults] = None,
) -> AssembledContract:
    """
    Merge exhibits into the section list, order it against the blueprint,
    then fold in the organization's venue policies for this contract type.
    """
    sections = [Section(title=s.title, body=s.body) for s in response.sections]
    exhibits = [Section(title=e.title, body=e.body) for e in (response.exhibits or [])]

    merged = merge_exhibits(sections, exhibits)
    ordered = normalize_and_order_sections(merged, contract_type, registry)
    ordered = inject_venue_policies_section(ordered, org_defaults, contract_type)

    blueprint = registry.get(contract_type)
    log.info(
        "Assembled '%s' (%s): %d sections, %d exhibits",
        response.contract_title, blueprint.type.value, len(sections), len(exhibits),
    )
    return AssembledContract(
        title=response.contract_title,
        intro=response.intro,
        contract_type=blueprint.type,
        sections=ordered,
    )
