from .domain_trust import DEFAULT_TRUST_POLICY, DomainTrustPolicy
from .evidence_scorer import EvidenceScorer
from .verdict_engine import VerdictEngine, classify, compute_confidence, no_evidence_response

__all__ = [
    "DEFAULT_TRUST_POLICY",
    "DomainTrustPolicy",
    "EvidenceScorer",
    "VerdictEngine",
    "classify",
    "compute_confidence",
    "no_evidence_response",
]
