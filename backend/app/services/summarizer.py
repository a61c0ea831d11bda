"""
AI summarization service with model fallback.

Walks an ordered list of Claude models (cheapest first) and returns the first
successful HTML summary. Quota exhaustion (429) and unknown-model (404)
errors move on to the next model; anything else stops the walk. When no
model produced a summary, a plain-text excerpt wrapped in a warning block is
returned instead: summarize() never raises.
"""

import html
import logging
from typing import List, Optional

import anthropic

from app.config import DEFAULT_SUMMARY_MODELS
from app.models.upload import SummaryResult, SummarySource

logger = logging.getLogger(__name__)

MAX_TOKENS = 4096
MAX_INPUT_CHARS = 30000
FALLBACK_CHARS = 3000

# HTTP statuses that mean "this model is unavailable, another may work"
RECOVERABLE_STATUS_CODES = frozenset({404, 429})

FALLBACK_MARKER = "AI summary unavailable"

SUMMARY_PROMPT = """\
Please analyze the following document and provide an optimal, well-structured summary in HTML format.

Formatting requirements:
- Use HTML tags (<p>, <strong>, <ul>, <li>) for formatting.
- Highlight important keywords and concepts using <strong> tags.
- Structure the text into clear, readable paragraphs.
- DO NOT include a table of contents or "In this document" lists.
- DO NOT use markdown (like ** or ##), use HTML only.
- Use bullet points (<ul>/<li>) only for listing key takeaways at the end.

Content requirements:
- Focus on the core message and most important details.
- Make it easy to read and engaging.
- Start directly with the summary, no "Here is the summary" intro.

Document text:
{document_text}
"""

FALLBACK_TEMPLATE = """\
<div style="background-color: #fff3cd; color: #856404; padding: 10px; margin-bottom: 20px; border-radius: 4px; border: 1px solid #ffeeba;">
    <strong>&#9888; {marker}:</strong> The AI summary could not be generated right now. Here is an excerpt from the document:
</div>
<p>{preview}</p>
<p>...</p>
"""


class EmptySummaryError(Exception):
    """The model answered, but with no usable text."""


def is_recoverable(error: Exception) -> bool:
    """
    Classify a failed generation call.

    Recoverable means another model might still succeed: the account hit a
    rate/quota limit for this model, or the model id is unknown.
    """
    if isinstance(error, (anthropic.RateLimitError, anthropic.NotFoundError)):
        return True
    if isinstance(error, anthropic.APIStatusError):
        return error.status_code in RECOVERABLE_STATUS_CODES
    return False


def strip_code_fences(text: str) -> str:
    """Remove literal ```html / ``` markers the model sometimes wraps HTML in."""
    return text.replace("```html", "").replace("```", "").strip()


def build_fallback_html(text: str, max_chars: int = FALLBACK_CHARS) -> str:
    preview = html.escape(text[:max_chars]).replace("\n", "<br>")
    return FALLBACK_TEMPLATE.format(marker=FALLBACK_MARKER, preview=preview)


class Summarizer:
    """
    Long-lived summarization service.

    Args:
        client: An ``anthropic.Anthropic`` instance (or a test double). Built
                from ``api_key`` when omitted.
        models: Model ids in preference order.
        api_key: Used only when ``client`` is not given.
    """

    def __init__(
        self,
        client=None,
        models: Optional[List[str]] = None,
        api_key: Optional[str] = None,
        max_input_chars: int = MAX_INPUT_CHARS,
        fallback_chars: int = FALLBACK_CHARS,
    ):
        if client is None:
            client = anthropic.Anthropic(api_key=api_key)
        self.client = client
        self.models = list(models) if models else list(DEFAULT_SUMMARY_MODELS)
        self.max_input_chars = max_input_chars
        self.fallback_chars = fallback_chars

    def _generate(self, model: str, document_text: str) -> str:
        prompt = SUMMARY_PROMPT.replace("{document_text}", document_text)
        response = self.client.messages.create(
            model=model,
            max_tokens=MAX_TOKENS,
            messages=[{"role": "user", "content": prompt}],
        )
        if not response.content:
            raise EmptySummaryError(f"Model {model} returned no content")

        summary = strip_code_fences(response.content[0].text or "")
        if not summary:
            raise EmptySummaryError(f"Model {model} returned an empty summary")
        return summary

    def summarize(self, text: str) -> SummaryResult:
        """
        Summarize ``text`` as HTML.

        Returns an AI summary from the first model that succeeds, or the
        fallback excerpt when none does. Never raises.
        """
        document_text = text[: self.max_input_chars]
        attempted: List[str] = []
        last_error: Optional[Exception] = None

        for model in self.models:
            attempted.append(model)
            logger.info(f"Attempting to summarize with model: {model}")
            try:
                summary = self._generate(model, document_text)
            except Exception as e:
                last_error = e
                logger.error(f"Error with model {model}: {e}")
                if is_recoverable(e):
                    logger.info(f"Model {model} unavailable, trying next model")
                    continue
                break

            logger.info(f"Summary generated with model: {model}")
            return SummaryResult(html=summary, source=SummarySource.AI, model=model)

        failure_reason = str(last_error) if last_error else "no models configured"
        logger.warning(
            "All AI models failed to generate a summary; using text excerpt",
            extra={
                "summary_source": SummarySource.FALLBACK.value,
                "failure_reason": failure_reason,
                "failure_type": type(last_error).__name__ if last_error else None,
                "attempted_models": attempted,
            },
        )
        return SummaryResult(
            html=build_fallback_html(text, self.fallback_chars),
            source=SummarySource.FALLBACK,
            failure_reason=failure_reason,
        )
