from typing import Optional, Protocol

from config import Settings, logger, settings
from config.constants import LLM_CONFIG
from exceptions import JudgeException, LLMException
from prompts import JUDGE_SYSTEM_PROMPT, JUDGE_USER_PROMPT
from utils.parsing import parse_score
from .llm import call_openai_chat


class LlmJudge(Protocol):
    async def judge(self, claim: str, merged_evidence: str) -> float:
        """Return a score in [-1, 1]: negative leans false, positive leans true."""
        ...


class OpenAiJudge:
    def __init__(self, current: Optional[Settings] = None):
        self.settings = current or settings

    async def judge(self, claim: str, merged_evidence: str) -> float:
        messages = [
            {"role": "system", "content": JUDGE_SYSTEM_PROMPT},
            {"role": "user", "content": JUDGE_USER_PROMPT.format(claim=claim, evidence=merged_evidence)},
        ]
        try:
            answer = await call_openai_chat(
                messages,
                temperature=LLM_CONFIG.JUDGE_TEMPERATURE,
                timeout=LLM_CONFIG.JUDGE_TIMEOUT,
                current=self.settings,
            )
        except LLMException as e:
            raise JudgeException(e.message)

        score = parse_score(answer)
        if score is None:
            logger.warning(f"Judge answer is not a number: {answer[:100]!r}")
            raise JudgeException("answer is not a number")
        return max(-1.0, min(1.0, score))


def build_judge(current: Optional[Settings] = None) -> Optional[LlmJudge]:
    """An OpenAI judge when AI_PROVIDER=openai and a key is set, otherwise None."""
    current = current or settings
    return OpenAiJudge(current) if current.judge_enabled else None
