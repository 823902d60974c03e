from typing import Optional

from pydantic import ValidationError

from config import Settings, logger, settings
from config.constants import LLM_CONFIG, VERDICT_CONFIG
from confidence.domain_trust import DEFAULT_TRUST_POLICY, DomainTrustPolicy
from confidence.evidence_scorer import extract_domain
from confidence.verdict_engine import NO_EVIDENCE_SUMMARY
from exceptions import LLMException, UpstreamContractException
from models.claims import VerificationRequest
from models.llm import LlmEvidencePayload, LlmVerdictPayload
from models.verdicts import UNSURE, Evidence, VerificationResponse
from prompts import VERIFIER_SYSTEM_PROMPT, VERIFIER_USER_PROMPT
from utils.parsing import extract_json_block
from .llm import call_openai_chat


def _nn(value: Optional[str]) -> str:
    return value or ""


def render_user_prompt(req: VerificationRequest) -> str:
    return VERIFIER_USER_PROMPT.format(
        platform=_nn(req.platform),
        source_url=_nn(req.source_url),
        language=_nn(req.language),
        title=_nn(req.title),
        text=_nn(req.text),
        image_urls=", ".join(req.image_urls or []),
    )


def failure_response(reason: str) -> VerificationResponse:
    return VerificationResponse(
        verdict=UNSURE,
        confidence=VERDICT_CONFIG.NO_EVIDENCE_CONFIDENCE,
        rationale=f"- LLM-only path error: {reason}",
        consensus_summary=NO_EVIDENCE_SUMMARY,
        normalized_text="",
        evidences=(),
    )


class OpenAiVerifier:
    """
    Delegates the whole search-and-judge job to a chat model.

    The model must answer with one JSON object. Its confidence is clamped,
    unknown verdicts become UNSURE and trust priors are recomputed locally
    from each evidence URL; the model's own domain guess is ignored.
    Any failure becomes an UNSURE / 30 response with a diagnostic rationale.
    """

    def __init__(self, current: Optional[Settings] = None, trust_policy: DomainTrustPolicy = DEFAULT_TRUST_POLICY):
        self.settings = current or settings
        self.trust_policy = trust_policy

    async def verify(self, req: VerificationRequest) -> VerificationResponse:
        if not self.settings.OPENAI_API_KEY:
            return failure_response("OPENAI_API_KEY not configured")

        messages = [
            {"role": "system", "content": VERIFIER_SYSTEM_PROMPT},
            {"role": "user", "content": render_user_prompt(req)},
        ]
        try:
            content = await call_openai_chat(
                messages,
                temperature=LLM_CONFIG.VERIFIER_TEMPERATURE,
                response_format={"type": "json_object"},
                current=self.settings,
            )
            payload = self._parse(content)
        except LLMException as e:
            logger.warning(f"LLM verification failed: {e.message}")
            if e.status_code is not None:
                return failure_response(f"OpenAI API error: HTTP {e.status_code}")
            return failure_response(e.details.get("reason", e.message))
        except Exception as e:
            logger.exception(f"Unexpected LLM verification error: {e}")
            return failure_response(f"unexpected error: {type(e).__name__}")

        try:
            return self._to_response(payload)
        except Exception as e:
            logger.exception(f"Failed to build the LLM verification response: {e}")
            return failure_response(f"unexpected error: {type(e).__name__}")

    @staticmethod
    def _parse(content: str) -> LlmVerdictPayload:
        data = extract_json_block(content)
        if data is None:
            logger.error(f"LLM answer is not a JSON object: {content[:500]}")
            raise UpstreamContractException("answer is not a JSON object")
        try:
            return LlmVerdictPayload.model_validate(data)
        except ValidationError as e:
            logger.error(f"LLM answer does not match the schema: {e}")
            raise UpstreamContractException("answer does not match the schema")

    def _to_evidence(self, item: LlmEvidencePayload) -> Evidence:
        domain = extract_domain(item.url)
        if domain and domain.startswith("www."):
            domain = domain[4:]
        return Evidence(
            source=item.source,
            domain=domain,
            title=item.title,
            url=item.url,
            snippet=item.snippet,
            published_at=item.publishedAt,
            similarity=0.0,
            trust_prior=self.trust_policy.get_trust_prior(domain),
        )

    def _to_response(self, payload: LlmVerdictPayload) -> VerificationResponse:
        if payload.confidence == 0:
            confidence = VERDICT_CONFIG.LLM_ZERO_CONFIDENCE
        else:
            confidence = max(1, min(100, payload.confidence))

        evidences = tuple(
            self._to_evidence(item) for item in payload.evidences[:VERDICT_CONFIG.MAX_EVIDENCES]
        )
        return VerificationResponse(
            verdict=payload.verdict,
            confidence=confidence,
            rationale=payload.rationale,
            consensus_summary=payload.consensusSummary,
            normalized_text=payload.normalizedText,
            evidences=evidences,
        )
