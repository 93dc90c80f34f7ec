"""Google Gemini API wrapper: timeouts, bounded retries, model fallback, JSON decoding.

Every failure surfaces as ``CollaboratorError`` so callers can degrade to
heuristic-only values without knowing about transport details.
"""

import asyncio
import functools
import json
import logging
import re
from typing import Any, Awaitable, Callable, TypeVar

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from config import settings
from services.errors import CollaboratorError

logger = logging.getLogger(__name__)

T = TypeVar("T")

SYSTEM_INSTRUCTION = 'You MUST return only valid JSON. No markdown. Use "", 0, false, or [] when unsure.'

_TRANSIENT_RE = re.compile(
    r"fetch failed|timed out|timeout|etimedout|429|quota|deadline|unavailable|resource.exhausted",
    re.IGNORECASE,
)

_client: genai.Client | None = None
_active_model: str | None = None


def get_client() -> genai.Client | None:
    global _client
    if not settings.gemini_api_key:
        logger.warning("No GEMINI_API_KEY set - Gemini features disabled")
        return None
    if _client is None:
        _client = genai.Client(api_key=settings.gemini_api_key)
    return _client


def is_transient(exc: BaseException) -> bool:
    """Timeouts, rate limits, 5xx and network errors are worth retrying."""
    if isinstance(exc, (asyncio.TimeoutError, TimeoutError, httpx.TransportError)):
        return True
    if isinstance(exc, genai_errors.APIError):
        code = exc.code or 0
        return code == 429 or code >= 500
    return bool(_TRANSIENT_RE.search(str(exc)))


async def call_with_retry(
    fn: Callable[[], Awaitable[T]],
    label: str,
    timeout: float | None = None,
    max_retries: int | None = None,
    backoff: float | None = None,
) -> T:
    """Run ``fn`` under a per-attempt timeout, retrying transient failures.

    Waits ``backoff * 2**attempt`` seconds between attempts. Non-transient
    failures fail fast.
    """
    timeout = settings.collaborator_timeout_seconds if timeout is None else timeout
    max_retries = settings.collaborator_max_retries if max_retries is None else max_retries
    backoff = settings.collaborator_backoff_seconds if backoff is None else backoff

    last: BaseException | None = None
    for attempt in range(max_retries + 1):
        try:
            return await asyncio.wait_for(fn(), timeout=timeout)
        except CollaboratorError:
            raise
        except Exception as e:
            last = e
            if not is_transient(e) or attempt == max_retries:
                break
            delay = backoff * 2 ** attempt
            logger.warning("%s failed (%s), retrying in %.1fs", label, e or type(e).__name__, delay)
            await asyncio.sleep(delay)

    reason = str(last) or type(last).__name__
    raise CollaboratorError(label, reason, transient=is_transient(last)) from last


def strip_code_fences(text: str) -> str:
    text = text.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else text[3:]
        if text.endswith("```"):
            text = text[:-3]
        text = text.strip()
    return text


def parse_json(raw: str | None, label: str) -> Any:
    """Decode a model reply, tolerating code fences and leading chatter."""
    if not raw or not raw.strip():
        raise CollaboratorError(label, "empty response")
    text = strip_code_fences(raw)
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass
    match = re.search(r"\{[\s\S]*\}", text)
    if match:
        try:
            return json.loads(match.group(0))
        except json.JSONDecodeError:
            pass
    logger.error("Failed to parse Gemini response as JSON for %s", label)
    raise CollaboratorError(label, "malformed JSON response")


async def _generate(client: genai.Client, model_id: str, prompt: str, temperature: float) -> str | None:
    response = await client.aio.models.generate_content(
        model=model_id,
        contents=prompt,
        config=types.GenerateContentConfig(
            temperature=temperature,
            max_output_tokens=4096,
            response_mime_type="application/json",
            system_instruction=SYSTEM_INSTRUCTION,
        ),
    )
    return response.text


def _model_order() -> list[str]:
    models = list(settings.gemini_models)
    if _active_model in models:
        models.remove(_active_model)
        models.insert(0, _active_model)
    return models


def _model_unavailable(exc: BaseException | None) -> bool:
    return isinstance(exc, genai_errors.ClientError) and exc.code in (403, 404)


async def generate_json(prompt: str, label: str, temperature: float = 0.0) -> Any:
    """Send a prompt to Gemini and return the decoded JSON payload.

    Falls through ``settings.gemini_models`` when a model is not enabled for
    the key, remembering the first one that answers.
    """
    global _active_model

    client = get_client()
    if client is None:
        raise CollaboratorError(label, "GEMINI_API_KEY not configured")

    last_error: CollaboratorError | None = None
    for model_id in _model_order():
        try:
            text = await call_with_retry(
                functools.partial(_generate, client, model_id, prompt, temperature),
                label=f"{label} [{model_id}]",
            )
        except CollaboratorError as e:
            if not _model_unavailable(e.__cause__):
                raise
            logger.warning("Gemini model %s unavailable, trying next: %s", model_id, e.reason)
            last_error = e
            continue
        _active_model = model_id
        return parse_json(text, label)

    raise last_error or CollaboratorError(label, "no Gemini model configured")
