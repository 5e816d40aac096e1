import base64
import json
import logging
import re
from typing import Any, Dict, Optional

from flask import current_app

from nutrilog.exceptions import AnalysisParseError, ExternalServiceError, ServiceNotConfiguredError

logger = logging.getLogger(__name__)

_FENCED_JSON = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```")


def _openai_complete(prompt: str, system: Optional[str], image: Optional[bytes], mime_type: str) -> str:
    from openai import OpenAI, OpenAIError

    api_key = current_app.config.get("OPENAI_API_KEY")
    if not api_key:
        raise ServiceNotConfiguredError("OPENAI_API_KEY is not set")

    content: Any = prompt
    if image is not None:
        encoded = base64.b64encode(image).decode("ascii")
        content = [
            {"type": "text", "text": prompt},
            {"type": "image_url", "image_url": {"url": f"data:{mime_type};base64,{encoded}"}},
        ]

    messages = []
    if system:
        messages.append({"role": "system", "content": system})
    messages.append({"role": "user", "content": content})

    try:
        client = OpenAI(api_key=api_key)
        response = client.chat.completions.create(
            model=current_app.config.get("OPENAI_MODEL", "gpt-4o"),
            messages=messages,
            max_tokens=current_app.config.get("AI_MAX_TOKENS", 1000),
        )
    except OpenAIError as e:
        logger.error("OpenAI API error: %s", e)
        raise ExternalServiceError("AI provider request failed") from e

    return response.choices[0].message.content or ""


def _gemini_complete(prompt: str, system: Optional[str], image: Optional[bytes], mime_type: str) -> str:
    from google import genai
    from google.genai import types, errors

    api_key = current_app.config.get("GEMINI_API_KEY")
    if not api_key:
        raise ServiceNotConfiguredError("GEMINI_API_KEY is not set")

    contents: Any = prompt
    if image is not None:
        contents = [types.Part.from_bytes(data=image, mime_type=mime_type), prompt]

    try:
        client = genai.Client(api_key=api_key)
        response = client.models.generate_content(
            model=current_app.config.get("GEMINI_MODEL", "gemini-2.0-flash"),
            contents=contents,
            config=types.GenerateContentConfig(
                system_instruction=system,
                temperature=0.0,
                max_output_tokens=current_app.config.get("AI_MAX_TOKENS", 1000),
            )
        )
    except errors.APIError as e:
        logger.error("Gemini API error: %s", e)
        raise ExternalServiceError("AI provider request failed") from e

    return (response.text or "") if response else ""


_PROVIDERS = {
    "openai": _openai_complete,
    "gemini": _gemini_complete,
}


def complete(prompt: str, system: Optional[str] = None, image: Optional[bytes] = None,
             mime_type: str = "image/jpeg") -> str:
    """Send one prompt (optionally with an image) to the configured provider and return its text."""
    provider = (current_app.config.get("AI_PROVIDER") or "openai").lower()
    fn = _PROVIDERS.get(provider)
    if fn is None:
        raise ServiceNotConfiguredError(f"Unknown AI_PROVIDER '{provider}'")
    return fn(prompt, system, image, mime_type)


def extract_json(content: str) -> Dict[str, Any]:
    """Parse a model reply as a JSON object, unwrapping Markdown code fences."""
    text = (content or "").strip()
    match = _FENCED_JSON.search(text)
    if match:
        text = match.group(1).strip()
    try:
        data = json.loads(text or "{}")
    except json.JSONDecodeError as e:
        logger.error("Could not parse AI reply as JSON: %r", content[:500] if content else content)
        raise AnalysisParseError("Failed to parse nutrition data") from e
    if not isinstance(data, dict):
        raise AnalysisParseError("Failed to parse nutrition data")
    return data
