from typing import Any, Dict, List, Optional

import httpx

from config import Settings, logger, settings
from config.constants import LLM_CONFIG
from exceptions import LLMException, UpstreamContractException
from utils.retry import async_retry


@async_retry(max_attempts=2, retry_on=(httpx.TransportError,))
async def _post_chat(endpoint: str, headers: Dict[str, str], body: Dict[str, Any], timeout: float) -> httpx.Response:
    async with httpx.AsyncClient(timeout=timeout) as client:
        return await client.post(endpoint, headers=headers, json=body)


def extract_message_content(data: Any) -> str:
    """Return choices[0].message.content, raising UpstreamContractException when it is missing or blank."""
    if not isinstance(data, dict):
        raise UpstreamContractException("response is not a JSON object")
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        raise UpstreamContractException("choices empty")
    first = choices[0] if isinstance(choices[0], dict) else {}
    message = first.get("message") if isinstance(first.get("message"), dict) else {}
    content = message.get("content")
    if not isinstance(content, str) or not content.strip():
        raise UpstreamContractException("content empty")
    return content


async def call_openai_chat(
    messages: List[Dict[str, str]],
    temperature: float,
    response_format: Optional[Dict[str, str]] = None,
    timeout: float = LLM_CONFIG.REQUEST_TIMEOUT,
    current: Optional[Settings] = None,
) -> str:
    """
    Send a chat completion request to an OpenAI-compatible endpoint and return
    the first message content. Connection failures are retried once; every
    other failure is raised as LLMException (status_code set for HTTP errors).
    """
    current = current or settings
    if not current.OPENAI_API_KEY:
        logger.critical("OPENAI_API_KEY not configured.")
        raise LLMException("OPENAI_API_KEY not configured", recoverable=False)

    headers = {
        "Authorization": f"Bearer {current.OPENAI_API_KEY}",
        "Content-Type": "application/json",
    }
    body: Dict[str, Any] = {
        "model": current.OPENAI_MODEL,
        "messages": messages,
        "temperature": temperature,
    }
    if response_format:
        body["response_format"] = response_format

    try:
        response = await _post_chat(current.OPENAI_CHAT_ENDPOINT, headers, body, timeout)
        response.raise_for_status()
        data = response.json()
    except httpx.HTTPStatusError as e:
        logger.error("OpenAI HTTP error %s for URL %s: %s", e.response.status_code, e.request.url, e.response.text[:500])
        raise LLMException(f"HTTP {e.response.status_code}", status_code=e.response.status_code)
    except httpx.RequestError as e:
        logger.error("OpenAI request error: %s", str(e))
        raise LLMException(f"Request failed: {str(e)}")
    except ValueError as e:
        logger.error("OpenAI returned non-JSON response: %s", response.text[:200])
        raise UpstreamContractException(f"invalid JSON body: {e}")

    return extract_message_content(data)
