"""
LLM Helpers Module

Chat-completion call and reply parsing shared by the knowledge graph
generator. All completion traffic goes through this module.

Example Usage:
    from profile_graph.utils.llm_helpers import call_completion, parse_json_reply

    reply = await call_completion(settings, system_prompt, user_prompt)
    data = parse_json_reply(reply)
"""

import json
import re
from typing import Any, Optional

import httpx
import structlog

from profile_graph.models.config import CompletionSettings

logger = structlog.get_logger(__name__)

# Greedy: first "{" through the last "}" in the reply
_JSON_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")


class CompletionError(Exception):
    """Raised when the completion endpoint call fails.

    Attributes:
        status_code: HTTP status of a non-success response, None for
            timeouts and transport errors
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def extract_json_candidate(response_text: str) -> str:
    """Extract the brace-delimited JSON object from an LLM reply.

    Tolerates commentary or markdown fences around the object. When the reply
    holds no "{...}" span, the raw text is returned unchanged.

    Args:
        response_text: Raw text response from LLM

    Returns:
        Text to hand to the JSON parser
    """
    match = _JSON_OBJECT_PATTERN.search(response_text)
    return match.group(0) if match else response_text


def parse_json_reply(response_text: str) -> Any:
    """Parse the JSON object contained in an LLM reply.

    Raises:
        json.JSONDecodeError: If the candidate text is not valid JSON
    """
    return json.loads(extract_json_candidate(response_text))


def build_completion_payload(
    settings: CompletionSettings, system_prompt: str, user_prompt: str
) -> dict[str, Any]:
    """Build the chat-completion request body."""
    return {
        "model": settings.model,
        "messages": [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ],
        "temperature": settings.temperature,
        "max_tokens": settings.max_tokens,
    }


def _reply_text(data: Any) -> str:
    """Pull choices[0].message.content out of a completion response body."""
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return ""
    return content if isinstance(content, str) else ""


async def call_completion(
    settings: CompletionSettings,
    system_prompt: str,
    user_prompt: str,
    client: Optional[httpx.AsyncClient] = None,
    correlation_id: Optional[str] = None,
) -> str:
    """
    Call the chat-completion endpoint once.

    Args:
        settings: Endpoint, credential, model and sampling configuration
        system_prompt: System instruction
        user_prompt: User message
        client: Optional shared AsyncClient (a short-lived one is created if None)
        correlation_id: Optional correlation ID for logging

    Returns:
        Text of the first choice's message ("" if the body carries none)

    Raises:
        CompletionError: On timeout, transport error, non-success status or a
            body that is not JSON

    Note:
        - No retry: a failed call is reported to the caller immediately
        - The request is bounded by settings.timeout (seconds)
    """
    log = logger.bind(correlation_id=correlation_id) if correlation_id else logger

    payload = build_completion_payload(settings, system_prompt, user_prompt)
    headers = {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {settings.api_key}",
    }

    log.info("Calling completion endpoint", model=settings.model)
    log.debug("Completion request prepared", prompt_length=len(user_prompt))

    owns_client = client is None
    http = client or httpx.AsyncClient()
    try:
        response = await http.post(
            settings.api_endpoint,
            json=payload,
            headers=headers,
            timeout=settings.timeout,
        )
    except httpx.TimeoutException as e:
        log.error("Completion call timed out", timeout=settings.timeout)
        raise CompletionError(f"Timeout after {settings.timeout}s") from e
    except httpx.HTTPError as e:
        log.error("Completion call failed", error_type=type(e).__name__, error=str(e))
        raise CompletionError(f"Completion request failed: {e}") from e
    finally:
        if owns_client:
            await http.aclose()

    if not response.is_success:
        error_text = response.text[:500]
        log.error(
            "Completion endpoint returned error status",
            status_code=response.status_code,
            response=error_text,
        )
        raise CompletionError(
            f"Completion endpoint returned status {response.status_code}: {error_text}",
            status_code=response.status_code,
        )

    try:
        data = response.json()
    except json.JSONDecodeError as e:
        log.error("Completion response body is not JSON", response=response.text[:200])
        raise CompletionError("Completion response body is not JSON") from e

    text = _reply_text(data)
    log.info("Received completion reply", response_length=len(text))
    return text
