"""Thin helpers around the OpenAI chat-completion API."""
import asyncio
import json
import logging
import re
from collections.abc import Awaitable
from typing import Any, TypeVar

import openai
from fastapi import Request
from openai import AsyncOpenAI

from exambuddy.core.config import Settings
from exambuddy.core.errors import ClientDisconnectedError, UpstreamError

logger = logging.getLogger(__name__)

T = TypeVar("T")

_JSON_BLOCK_RE = re.compile(r"^```(?:json)?\s*|```$", re.M)


def best_effort_json_parse(s: str) -> dict:
    """Parse JSON even when the model wraps it in code fences or prose."""
    raw = (s or "").strip()
    raw = _JSON_BLOCK_RE.sub("", raw).strip()
    try:
        data = json.loads(raw)
        return data if isinstance(data, dict) else {}
    except ValueError:
        pass
    m = re.search(r"\{.*\}", raw, flags=re.S)
    if m:
        try:
            data = json.loads(m.group(0))
            return data if isinstance(data, dict) else {}
        except ValueError:
            pass
    return {}


def build_openai_client(settings: Settings) -> AsyncOpenAI:
    if not settings.openai_api_key:
        raise UpstreamError("OPENAI_API_KEY not set")
    return AsyncOpenAI(
        api_key=settings.openai_api_key,
        timeout=settings.llm_timeout_seconds,
        max_retries=0,
    )


async def chat_completion(
    client: Any,
    model: str,
    messages: list[dict[str, str]],
    **kwargs: Any,
) -> str:
    """Run one chat completion and return the message text."""
    try:
        r = await client.chat.completions.create(model=model, messages=messages, **kwargs)
    except openai.APITimeoutError as exc:
        logger.warning("LLM call to %s timed out", model)
        raise UpstreamError("LLM request timed out.", details=str(exc)) from exc
    except openai.OpenAIError as exc:
        logger.exception("LLM call to %s failed", model)
        raise UpstreamError("LLM request failed.", details=str(exc)) from exc
    if not r.choices:
        raise UpstreamError("LLM returned no choices.")
    return (r.choices[0].message.content or "").strip()


async def run_until_disconnected(request: Request, awaitable: Awaitable[T], poll_seconds: float = 0.5) -> T:
    """Await ``awaitable`` but cancel it if the HTTP client goes away."""
    task = asyncio.ensure_future(awaitable)
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=poll_seconds)
            if done:
                return task.result()
            if await request.is_disconnected():
                logger.info("Client disconnected from %s; cancelling upstream call", request.url.path)
                task.cancel()
                raise ClientDisconnectedError("Client disconnected.")
    finally:
        if not task.done():
            task.cancel()
