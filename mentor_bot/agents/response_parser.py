"""
Parsing of MentorBot's final message into an FAQAnswer.

Models do not always honour the JSON-only instruction. Accepted shapes:
- {"answer": "..."}
- the same object wrapped in a ```json code fence
- a JSON string whose content is that object (double encoded)
Anything else raises ResponseFormatError.
"""

import json
import re
from typing import Any

from pydantic import BaseModel, ValidationError as PydanticValidationError

CODE_FENCE_PATTERN = re.compile(r"^\s*```(?:json)?\s*(.*?)\s*```\s*$", re.DOTALL | re.IGNORECASE)


class FAQAnswer(BaseModel):
    answer: str


class ResponseFormatError(ValueError):
    """The model output is not an {"answer": str} object."""


def message_text(content: Any) -> str:
    """
    Flatten a chat message content into text.
    Gemini may return a list of content blocks instead of a string.
    """
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(block.get("text", ""))
        return "".join(parts)
    return str(content)


def strip_code_fence(text: str) -> str:
    match = CODE_FENCE_PATTERN.match(text)
    return match.group(1) if match else text.strip()


def _to_answer(value: Any) -> FAQAnswer:
    try:
        return FAQAnswer.model_validate(value)
    except PydanticValidationError as e:
        raise ResponseFormatError(f"Unexpected response shape: {str(e)}") from e


def parse_faq_answer(raw: str) -> FAQAnswer:
    """
    Parse model output into an FAQAnswer.

    Args:
        raw: Final message text from the model

    Returns:
        FAQAnswer

    Raises:
        ResponseFormatError: if the output cannot be read as {"answer": str}
    """
    if raw is None or not str(raw).strip():
        raise ResponseFormatError("Empty response from model")

    text = strip_code_fence(str(raw))
    try:
        value = json.loads(text)
    except json.JSONDecodeError as e:
        raise ResponseFormatError(f"Response is not JSON: {str(e)}") from e

    # One level of double encoding: a JSON string holding the JSON object
    if isinstance(value, str):
        try:
            value = json.loads(strip_code_fence(value))
        except json.JSONDecodeError as e:
            raise ResponseFormatError(f"Double-encoded response is not JSON: {str(e)}") from e

    if not isinstance(value, dict):
        raise ResponseFormatError(f"Expected a JSON object, got {type(value).__name__}")

    return _to_answer(value)
