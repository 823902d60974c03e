from typing import List, Optional, Sequence, Tuple

from config import logger
from config.constants import VERDICT_CONFIG
from models.verdicts import (
    LIKELY_FALSE,
    LIKELY_TRUE,
    UNSURE,
    Evidence,
    VerdictType,
    VerificationResponse,
)

NO_EVIDENCE_RATIONALE = "- Not enough reference search results (check search engines, queries or configuration)."
NO_EVIDENCE_SUMMARY = "Could not find enough related references."


def averages(evidences: Sequence[Evidence], top_k: int = VERDICT_CONFIG.AVERAGE_TOP_K) -> Tuple[float, float]:
    """Mean similarity and mean trust prior over the first top_k evidences."""
    top = list(evidences[:top_k])
    if not top:
        return 0.0, VERDICT_CONFIG.DEFAULT_PRIOR
    sim_avg = sum(e.similarity for e in top) / len(top)
    prior_avg = sum(e.trust_prior for e in top) / len(top)
    return sim_avg, prior_avg


def compute_confidence(sim_avg: float, prior_avg: float, judge_score: Optional[float] = None) -> int:
    """
    Blend similarity, trust prior and the optional judge score into a 0-100 confidence.

    The judge term only applies when a judge actually produced a score; its
    [-1, 1] output is mapped onto [0, 1] before weighting.
    """
    cfg = VERDICT_CONFIG
    llm_term = ((judge_score + 1.0) / 2.0) * cfg.JUDGE_WEIGHT if judge_score is not None else 0.0
    raw = sim_avg * cfg.SIMILARITY_WEIGHT + prior_avg * cfg.PRIOR_WEIGHT + llm_term
    raw = max(0.0, min(1.0, raw))
    return int(round(raw * 100))


def classify(confidence: int) -> VerdictType:
    if confidence >= VERDICT_CONFIG.TRUE_THRESHOLD:
        return LIKELY_TRUE
    if confidence <= VERDICT_CONFIG.FALSE_THRESHOLD:
        return LIKELY_FALSE
    return UNSURE


def render_rationale(keywords: Sequence[str], sim_avg: float, prior_avg: float, judge_used: bool) -> str:
    lines = [
        f"- Keywords: {', '.join(keywords)}",
        f"- Average similarity: {sim_avg:.2f}",
        f"- Average source trust: {prior_avg:.2f}",
        f"- LLM adjustment used: {'yes' if judge_used else 'no'}",
    ]
    return "\n".join(lines)


def consensus_summary(evidences: Sequence[Evidence]) -> str:
    if not evidences:
        return NO_EVIDENCE_SUMMARY
    titles = [e.title for e in evidences[:VERDICT_CONFIG.AVERAGE_TOP_K]]
    return "Top sources: " + " / ".join(titles)


def no_evidence_response(normalized: str) -> VerificationResponse:
    return VerificationResponse(
        verdict=UNSURE,
        confidence=VERDICT_CONFIG.NO_EVIDENCE_CONFIDENCE,
        rationale=NO_EVIDENCE_RATIONALE,
        consensus_summary=NO_EVIDENCE_SUMMARY,
        normalized_text=normalized,
        evidences=(),
    )


class VerdictEngine:
    """Scores ranked evidence and renders the final response."""

    def evaluate(
        self,
        normalized: str,
        keywords: List[str],
        evidences: Sequence[Evidence],
        judge_score: Optional[float] = None,
    ) -> VerificationResponse:
        if not evidences:
            return no_evidence_response(normalized)

        sim_avg, prior_avg = averages(evidences)
        confidence = compute_confidence(sim_avg, prior_avg, judge_score)
        verdict = classify(confidence)

        logger.info(
            f"Verdict: sim_avg={sim_avg:.2f}, prior_avg={prior_avg:.2f}, "
            f"judge={judge_score} -> {verdict} ({confidence})"
        )

        return VerificationResponse(
            verdict=verdict,
            confidence=confidence,
            rationale=render_rationale(keywords, sim_avg, prior_avg, judge_score is not None),
            consensus_summary=consensus_summary(evidences),
            normalized_text=normalized,
            evidences=tuple(evidences),
        )
