"""
Article generation through a Groq chat-completions client, with templated
fallback content whenever the backend cannot be used.

The client is built by the application (see ``build_gateway``) and passed in,
so tests and alternative deployments can supply their own.
"""

import enum
import logging
import re
from typing import Any, Optional

import groq
from groq import Groq

from blogstudio.config import (
    GROQ_API_KEY, GROQ_MODEL,
    GENERATION_MAX_TOKENS, GENERATION_TEMPERATURE,
    SUMMARY_MAX_TOKENS, SUMMARY_TEMPERATURE,
    GENERATION_SYSTEM_PROMPT, SUMMARY_SYSTEM_PROMPT,
)
from blogstudio.generation.fallback import generate_fallback_content
from blogstudio.generation.models import GenerateRequest, GenerationResult

logger = logging.getLogger(__name__)

LENGTH_WORDS = {
    "short": "800-1200",
    "medium": "1500-2000",
    "long": "2500-3500",
}

_H1 = re.compile(r"<h1[^>]*>(.*?)</h1>", re.IGNORECASE)
_ANY_TAG = re.compile(r"<[^>]*>")


class FailureKind(enum.Enum):
    """Why a generation attempt failed. Every kind currently falls back."""

    MODEL_UNAVAILABLE = ("model unavailable", False)
    QUOTA_EXCEEDED = ("quota exceeded", True)
    INVALID_CREDENTIALS = ("invalid credentials", False)
    OTHER = ("backend error", False)

    def __init__(self, label: str, retryable: bool):
        self.label = label
        self.retryable = retryable


# Message fragments checked when the exception carries no structured signal
_MESSAGE_MARKERS = [
    (FailureKind.MODEL_UNAVAILABLE, ("model_not_found", "does not exist")),
    (FailureKind.QUOTA_EXCEEDED, ("insufficient_quota", "quota", "429")),
    (FailureKind.INVALID_CREDENTIALS, ("invalid_api_key", "authentication")),
]

_STATUS_KINDS = {
    401: FailureKind.INVALID_CREDENTIALS,
    403: FailureKind.INVALID_CREDENTIALS,
    404: FailureKind.MODEL_UNAVAILABLE,
    429: FailureKind.QUOTA_EXCEEDED,
}


def _error_code(exc: Exception) -> Optional[str]:
    """Pull the backend's error code from the exception or its JSON body."""
    code = getattr(exc, "code", None)
    if isinstance(code, str):
        return code
    body = getattr(exc, "body", None)
    if isinstance(body, dict):
        error = body.get("error", body)
        if isinstance(error, dict) and isinstance(error.get("code"), str):
            return error["code"]
    return None


def classify_failure(exc: Exception) -> FailureKind:
    """Map a completion-call exception to a FailureKind.

    SDK exception types and HTTP status win; the error code and message text
    are only consulted when those say nothing specific.
    """
    if isinstance(exc, groq.NotFoundError):
        return FailureKind.MODEL_UNAVAILABLE
    if isinstance(exc, groq.RateLimitError):
        return FailureKind.QUOTA_EXCEEDED
    if isinstance(exc, (groq.AuthenticationError, groq.PermissionDeniedError)):
        return FailureKind.INVALID_CREDENTIALS

    status = getattr(exc, "status_code", None)
    if status in _STATUS_KINDS:
        return _STATUS_KINDS[status]

    text = f"{_error_code(exc) or ''} {exc}".lower()
    for kind, markers in _MESSAGE_MARKERS:
        if any(marker in text for marker in markers):
            return kind
    return FailureKind.OTHER


def build_prompt(request: GenerateRequest) -> str:
    """Instruction prompt for a full HTML blog post."""
    topic_line = f"Topic: {request.topic}" if request.topic else ""
    return f"""Write a professional blog post with the following requirements:

Title: {request.title}
{topic_line}
Tone: {request.tone}
Length: {LENGTH_WORDS[request.length]} words

Please write a well-structured blog post that includes:
1. An engaging introduction
2. Clear section headings (use H2 tags)
3. Informative and engaging content
4. A conclusion that summarizes key points
5. Proper formatting with paragraphs, lists, and emphasis where appropriate

Format the response in HTML with proper tags like <h1>, <h2>, <h3>, <p>, <ul>, <li>, <strong>, <em>, etc.

Make sure the content is original, informative, and provides value to readers."""


def extract_title(content: str, default: str) -> str:
    """Text of the first <h1> in the content, else the requested title."""
    match = _H1.search(content)
    return match.group(1) if match else default


class GenerationGateway:
    """Generates article content with a chat-completions client, falling back to a template."""

    def __init__(
        self,
        client: Optional[Any],
        model: str = GROQ_MODEL,
        max_tokens: int = GENERATION_MAX_TOKENS,
        temperature: float = GENERATION_TEMPERATURE,
        summary_max_tokens: int = SUMMARY_MAX_TOKENS,
        summary_temperature: float = SUMMARY_TEMPERATURE,
    ):
        self.client = client
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.summary_max_tokens = summary_max_tokens
        self.summary_temperature = summary_temperature

    def _complete(self, system: str, user: str, max_tokens: int, temperature: float) -> str:
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            max_tokens=max_tokens,
            temperature=temperature,
        )
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""

    def generate(self, request: GenerateRequest) -> GenerationResult:
        """Generate an article; never raises because of the backend."""
        if self.client is None:
            logger.info("Generation backend not configured, using fallback content")
            return generate_fallback_content(request)

        try:
            content = self._complete(
                GENERATION_SYSTEM_PROMPT,
                build_prompt(request),
                self.max_tokens,
                self.temperature,
            )
            summary = self._complete(
                SUMMARY_SYSTEM_PROMPT,
                f"Summarize this blog post in 2-3 sentences: {_ANY_TAG.sub('', content)}",
                self.summary_max_tokens,
                self.summary_temperature,
            )
        except Exception as e:
            kind = classify_failure(e)
            logger.warning(
                "Generation failed (%s, retryable=%s), using fallback content: %s",
                kind.label, kind.retryable, e,
            )
            return generate_fallback_content(request)

        logger.info("Generated article: %s chars, title: %s", len(content), request.title)
        return GenerationResult(
            content=content,
            title=extract_title(content, request.title or ""),
            summary=summary,
        )


def build_gateway(api_key: Optional[str] = None) -> GenerationGateway:
    """Construct the gateway with a Groq client when an API key is available."""
    key = api_key if api_key is not None else GROQ_API_KEY
    client = Groq(api_key=key) if key else None
    return GenerationGateway(client=client)
