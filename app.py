# app.py
from __future__ import annotations
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import Optional, List, Dict, Any, Union
import logging
import time
from fastapi import FastAPI, Depends, HTTPException, Body, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from settings import settings
from telemetry import configure_logging
from schemas import (
    AssembledContract, Blueprint, ContractType, ContractTypeOption,
    OrderedSection, OrgContractDefaults, Section,
)
from blueprint_registry import BlueprintRegistry, BlueprintRegistryError, load_registry
from section_ordering import merge_exhibits, normalize_and_order_sections
from section_editing import extract_variables, reorder_sections
from contract_assembly import InvalidAIResponseError, assemble_contract_sections, parse_ai_contract_response

log = logging.getLogger("venuecontract.api")

# --- Registry dependency (loaded once, overridable in tests) ---
@lru_cache(maxsize=1)
def _default_registry() -> BlueprintRegistry:
    return load_registry()

def get_registry() -> BlueprintRegistry:
    return _default_registry()

@asynccontextmanager
async def lifespan(_app: FastAPI):
    configure_logging(settings.LOG_LEVEL)
    # Fail fast on broken blueprint data instead of on the first request
    try:
        get_registry()
    except BlueprintRegistryError as e:
        log.error(f"Blueprint registry failed to load: {e}")
        raise
    yield

app = FastAPI(title="VenueContract Section API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.middleware("http")
async def _timing(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    if settings.API_ENABLE_TIMING_LOGS:
        elapsed_ms = (time.perf_counter() - start) * 1000
        log.info(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f} ms)")
    return response

# --------- Schemas (Pydantic) ---------
class OrderSectionsIn(BaseModel):
    contract_type: ContractType
    sections: List[Section]
    exhibits: Optional[List[Section]] = None

class MergeExhibitsIn(BaseModel):
    sections: List[Section]
    exhibits: Optional[List[Section]] = None

class AssembleContractIn(BaseModel):
    contract_type: ContractType
    # raw model output (text, possibly fenced) or the decoded JSON object
    response: Union[Dict[str, Any], str]
    org_defaults: Optional[OrgContractDefaults] = None

class ReorderSectionsIn(BaseModel):
    sections: List[OrderedSection]
    # indices into sections, in the position each should take
    new_order: List[int]

class VariablesIn(BaseModel):
    text: str

class VariablesOut(BaseModel):
    variables: List[str]

# --------- Endpoints ---------

@app.get("/health")
def health():
    return {"status": "ok"}

@app.get("/contract-types", response_model=List[ContractTypeOption])
def list_contract_types(registry: BlueprintRegistry = Depends(get_registry)):
    return registry.contract_types()

@app.get("/blueprints/{contract_type}", response_model=Blueprint)
def read_blueprint(contract_type: str, registry: BlueprintRegistry = Depends(get_registry)):
    try:
        return registry.get(contract_type.strip().upper())
    except KeyError:
        raise HTTPException(404, f"Unknown contract type '{contract_type}'")

@app.post("/sections/order", response_model=List[OrderedSection])
def order_sections(body: OrderSectionsIn, registry: BlueprintRegistry = Depends(get_registry)):
    """
    Normalize titles, dedupe and sort sections into blueprint order.
    Exhibits, when given, are merged in (lettered) before ordering.
    """
    try:
        merged = merge_exhibits(body.sections, body.exhibits)
        return normalize_and_order_sections(merged, body.contract_type, registry)
    except Exception as e:
        log.exception("Section ordering failed")
        raise HTTPException(500, f"Section ordering failed: {e}")

@app.post("/sections/merge-exhibits", response_model=List[Section])
def merge_exhibit_sections(body: MergeExhibitsIn):
    return merge_exhibits(body.sections, body.exhibits)

@app.post("/sections/reorder", response_model=List[OrderedSection])
def reorder_section_list(body: ReorderSectionsIn):
    try:
        return reorder_sections(body.sections, body.new_order)
    except ValueError as e:
        raise HTTPException(422, str(e))

@app.post("/sections/variables", response_model=VariablesOut)
def section_variables(body: VariablesIn):
    return VariablesOut(variables=extract_variables(body.text))

@app.post("/contracts/assemble", response_model=AssembledContract)
def assemble_contract(
    body: AssembleContractIn = Body(
        ...,
        openapi_examples={
            "golf_outing": {
                "summary": "Golf outing response with one exhibit",
                "value": {
                    "contract_type": "GOLF_OUTING",
                    "response": {
                        "contractTitle": "Spring Charity Scramble Agreement",
                        "intro": "Agreement for the annual charity scramble.",
                        "sections": [
                            {"title": "Signatures", "body": "Signed by the parties below."},
                            {"title": "PARTIES & EVENT OVERVIEW", "body": "Venue and Client agree..."},
                            {"title": "Weather Policy", "body": "Rainouts are rescheduled within 90 days."},
                        ],
                        "exhibits": [
                            {"title": "Pricing Sheet", "body": "$85 per player, carts included."}
                        ],
                    },
                },
            }
        },
    ),
    registry: BlueprintRegistry = Depends(get_registry),
):
    try:
        parsed = parse_ai_contract_response(body.response)
        return assemble_contract_sections(parsed, body.contract_type, registry, body.org_defaults)
    except InvalidAIResponseError as e:
        log.warning(f"Rejected AI response for {body.contract_type.value}: {e}")
        raise HTTPException(422, str(e))
    except HTTPException:
        raise
    except Exception as e:
        log.exception("Contract assembly failed")
        raise HTTPException(500, f"Failed to generate contract: {e}")

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=8000)
