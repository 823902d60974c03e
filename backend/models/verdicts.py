from datetime import datetime
from typing import Literal, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

VerdictType = Literal["LIKELY_TRUE", "LIKELY_FALSE", "UNSURE"]

LIKELY_TRUE: VerdictType = "LIKELY_TRUE"
LIKELY_FALSE: VerdictType = "LIKELY_FALSE"
UNSURE: VerdictType = "UNSURE"

VERDICTS = (LIKELY_TRUE, LIKELY_FALSE, UNSURE)

_FROZEN_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class Evidence(BaseModel):
    """A search result annotated with its similarity to the post and the domain trust prior."""
    model_config = _FROZEN_CAMEL

    source: str
    domain: Optional[str] = None
    title: str = ""
    url: str = ""
    snippet: str = ""
    published_at: Optional[datetime] = None
    similarity: float = Field(0.0, ge=0.0, le=1.0)
    trust_prior: float = Field(0.5, ge=0.0, le=1.0)


class VerificationResponse(BaseModel):
    """Complete response from the /verify endpoint."""
    model_config = _FROZEN_CAMEL

    verdict: VerdictType
    confidence: int = Field(..., ge=0, le=100)
    rationale: str
    consensus_summary: str
    normalized_text: str
    evidences: Tuple[Evidence, ...] = ()
