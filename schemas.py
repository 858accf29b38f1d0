# schemas.py
from __future__ import annotations
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Tuple

from settings import settings

# ---------- Contract types / blueprints ----------
class ContractType(str, Enum):
    GOLF_OUTING = "GOLF_OUTING"
    GOLF_LEAGUE = "GOLF_LEAGUE"
    WEDDING = "WEDDING"
    SPECIAL_EVENT = "SPECIAL_EVENT"
    OTHER = "OTHER"

class Blueprint(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: ContractType
    display_name: str
    description: str = ""
    # Canonical section titles, in the order they should appear
    sections: Tuple[str, ...]
    # Free-text drafting guidance handed to the prompt builder
    specific_instructions: str = ""

class ContractTypeOption(BaseModel):
    value: ContractType
    label: str
    description: str

# ---------- Sections ----------
class Section(BaseModel):
    title: str
    body: str

class OrderedSection(Section):
    order: int

# ---------- AI generation output ----------
class AIContractSection(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    body: str = Field(..., min_length=1, max_length=10000)

class AIContractResponse(BaseModel):
    # The model answers in camelCase; accept either spelling
    model_config = ConfigDict(populate_by_name=True)

    contract_title: str = Field(..., alias="contractTitle", min_length=1, max_length=200)
    intro: Optional[str] = Field(None, max_length=2000)
    sections: List[AIContractSection] = Field(..., min_length=1, max_length=settings.MAX_SECTIONS)
    exhibits: Optional[List[AIContractSection]] = Field(None, max_length=settings.MAX_EXHIBITS)

class AssembledContract(BaseModel):
    title: str
    intro: Optional[str] = None
    contract_type: ContractType
    sections: List[OrderedSection]

# ---------- Organization defaults / venue policies ----------
class CustomPolicy(BaseModel):
    name: str = ""
    content: str = ""
    applies_to: Optional[List[str]] = None

class OrgContractDefaults(BaseModel):
    default_weather_policy: Optional[str] = None
    weather_policy_applies_to: Optional[List[str]] = None
    default_alcohol_policy: Optional[str] = None
    alcohol_policy_applies_to: Optional[List[str]] = None
    default_liability_terms: Optional[str] = None
    liability_terms_applies_to: Optional[List[str]] = None
    custom_policies: List[CustomPolicy] = Field(default_factory=list)

class VenuePolicy(BaseModel):
    title: str
    content: str
