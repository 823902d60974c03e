import math
from datetime import datetime
from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, field_validator

from utils.parsing import parse_timestamp
from .verdicts import VERDICTS, UNSURE


class LlmEvidencePayload(BaseModel):
    """One evidence entry as emitted by the language model. Every field has a fallback."""
    model_config = ConfigDict(extra="ignore")

    source: str = "web"
    domain: Optional[str] = None
    title: str = ""
    url: str = ""
    snippet: str = ""
    publishedAt: Optional[datetime] = None

    @field_validator("source", mode="before")
    @classmethod
    def default_source(cls, v: Any) -> str:
        if v is None or not str(v).strip():
            return "web"
        return str(v)

    @field_validator("title", "url", "snippet", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("domain", mode="before")
    @classmethod
    def coerce_domain(cls, v: Any) -> Optional[str]:
        # ignored downstream; the domain is recomputed from the url
        if v is None or isinstance(v, (dict, list)):
            return None
        return str(v)

    @field_validator("publishedAt", mode="before")
    @classmethod
    def drop_bad_timestamp(cls, v: Any) -> Optional[datetime]:
        return parse_timestamp(v)


class LlmVerdictPayload(BaseModel):
    """The single JSON object the LLM-only verifier must return."""
    model_config = ConfigDict(extra="ignore")

    verdict: str = UNSURE
    confidence: int = 0
    rationale: str = ""
    consensusSummary: str = ""
    normalizedText: str = ""
    evidences: List[LlmEvidencePayload] = []

    @field_validator("verdict", mode="before")
    @classmethod
    def known_verdict(cls, v: Any) -> str:
        value = "" if v is None else str(v).strip().upper()
        return value if value in VERDICTS else UNSURE

    @field_validator("confidence", mode="before")
    @classmethod
    def coerce_confidence(cls, v: Any) -> int:
        try:
            value = float(v)
        except (TypeError, ValueError, OverflowError):
            return 0
        if not math.isfinite(value):
            return 0
        return int(round(value))

    @field_validator("rationale", "consensusSummary", "normalizedText", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("evidences", mode="before")
    @classmethod
    def keep_objects(cls, v: Any) -> list:
        if v is None:
            return []
        if not isinstance(v, list):
            raise ValueError("evidences must be a list")
        return [item for item in v if isinstance(item, dict)]
