"""Natural-language insights from a remote text-generation service.

The insights snapshot is summarized into a prompt, sent to Claude or
Gemini, and the reply is read back as an AIInsight. A reply that does not
contain a well-formed JSON object of the expected shape is kept as a plain
text summary instead.
"""

import json
import re
from typing import Any, Optional

import requests

from spendlens.domain.entities import AIInsight, AIProvider, Insights
from spendlens.domain.errors import InsightGenerationError, ValidationError
from spendlens.domain.serialization import ai_insight_from_dict
from spendlens.logging_setup import get_logger

logger = get_logger(__name__)

CLAUDE_API_URL = "https://api.anthropic.com/v1/messages"
CLAUDE_API_VERSION = "2023-06-01"
GEMINI_API_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

PROVIDERS = ("claude", "gemini")
DEFAULT_MODELS = {
    "claude": "claude-3-5-sonnet-20241022",
    "gemini": "gemini-pro",
}
MAX_OUTPUT_TOKENS = 1024
REQUEST_TIMEOUT = 30

_JSON_OBJECT_RE = re.compile(r"\{.*\}", re.DOTALL)


def build_prompt(insights: Insights) -> str:
    """Summarize an insights snapshot as a prompt for the text generator."""
    category_breakdown = "\n".join(
        f"- {c.category.value}: ${c.amount:.2f} ({c.percentage:.1f}%)"
        for c in insights.category_breakdown
    )
    top_merchants = "\n".join(
        f"- {m.merchant}: ${m.amount:.2f} ({m.count} transactions)"
        for m in insights.top_merchants
    )

    return f"""Analyze this personal finance data and provide actionable insights:

Financial Summary:
- Total Income: ${insights.total_income:.2f}
- Total Expenses: ${insights.total_expenses:.2f}
- Net Savings: ${insights.net_savings:.2f}
- Savings Rate: {insights.savings_rate:.1f}%
- Daily Average Spending: ${insights.daily_average:.2f}
- Burn Rate: {insights.burn_rate:.0f} days

Category Breakdown:
{category_breakdown}

Top Merchants:
{top_merchants}

Please provide:
1. A brief summary (2-3 sentences) of the overall financial health
2. 3-5 specific recommendations for improving finances
3. Any warnings or concerns about spending patterns
4. Opportunities for optimization or savings

Format your response as JSON with this structure:
{{
  "summary": "...",
  "recommendations": ["...", "..."],
  "warnings": ["...", "..."],
  "opportunities": ["...", "..."]
}}"""


def parse_insight_response(content: str) -> AIInsight:
    """Read the generator's reply as an AIInsight.

    The first ``{...}`` block in the reply is decoded. If there is none, or
    it is not an object with a summary and three string lists, the whole
    reply becomes the summary.
    """
    match = _JSON_OBJECT_RE.search(content)
    if match:
        try:
            return ai_insight_from_dict(json.loads(match.group(0)))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.debug("Insight reply is not the expected JSON shape: %s", e)

    return AIInsight(summary=content.strip())


def validate_api_key(provider: AIProvider) -> bool:
    """Return True if the provider's API key looks usable."""
    if not provider.api_key or not provider.api_key.strip():
        return False

    if provider.name == "claude":
        return provider.api_key.startswith("sk-ant-")
    if provider.name == "gemini":
        return len(provider.api_key) > 20

    return False


def _request_claude(
    prompt: str, provider: AIProvider, session: Any, timeout: float
) -> str:
    response = session.post(
        CLAUDE_API_URL,
        headers={
            "Content-Type": "application/json",
            "x-api-key": provider.api_key,
            "anthropic-version": CLAUDE_API_VERSION,
        },
        json={
            "model": provider.model or DEFAULT_MODELS["claude"],
            "max_tokens": MAX_OUTPUT_TOKENS,
            "messages": [{"role": "user", "content": prompt}],
        },
        timeout=timeout,
    )
    response.raise_for_status()
    return response.json()["content"][0]["text"]


def _request_gemini(
    prompt: str, provider: AIProvider, session: Any, timeout: float
) -> str:
    response = session.post(
        GEMINI_API_URL.format(model=provider.model or DEFAULT_MODELS["gemini"]),
        params={"key": provider.api_key},
        headers={"Content-Type": "application/json"},
        json={
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": 0.7,
                "maxOutputTokens": MAX_OUTPUT_TOKENS,
            },
        },
        timeout=timeout,
    )
    response.raise_for_status()
    return response.json()["candidates"][0]["content"]["parts"][0]["text"]


def generate_ai_insights(
    insights: Insights,
    provider: AIProvider,
    session: Optional[Any] = None,
    timeout: float = REQUEST_TIMEOUT,
) -> AIInsight:
    """Ask the configured provider for natural-language insights.

    Args:
        insights: Insights snapshot to describe
        provider: Provider name, API key and model
        session: Optional requests.Session (or anything with a compatible
            ``post``); the requests module is used when omitted
        timeout: Request timeout in seconds

    Returns:
        AIInsight

    Raises:
        ValidationError: If the provider is not supported
        InsightGenerationError: If the request fails or the reply can't be read
    """
    if provider.name not in PROVIDERS:
        raise ValidationError(
            f"Unsupported AI provider '{provider.name}'. Supported: {', '.join(PROVIDERS)}"
        )

    prompt = build_prompt(insights)
    http = session if session is not None else requests
    label = "Claude" if provider.name == "claude" else "Gemini"

    logger.info("Requesting insights from %s", label)
    try:
        if provider.name == "claude":
            content = _request_claude(prompt, provider, http, timeout)
        else:
            content = _request_gemini(prompt, provider, http, timeout)
    except requests.RequestException as e:
        logger.warning("%s request failed: %s", label, e)
        raise InsightGenerationError(f"Failed to generate insights from {label}: {e}") from e
    except (KeyError, IndexError, TypeError, ValueError) as e:
        logger.warning("%s returned an unexpected payload: %s", label, e)
        raise InsightGenerationError(
            f"Failed to generate insights from {label}: unexpected response"
        ) from e

    return parse_insight_response(content)
