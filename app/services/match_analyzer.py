"""
Resume / job description match analyzer.

Builds the scoring prompt, calls the configured LLM once, and turns its reply
into a validated AnalysisResult. The score and verdict come from the model;
this module only checks the reply's shape, clamps the score and trims the
skill lists.
"""
import json
import logging
import math
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

import openai

from app.core import config
from app.core.errors import (
    AnalysisError,
    AnalysisInputError,
    AnalysisParseError,
    LLMAuthenticationError,
    LLMConfigurationError,
    LLMRateLimitError,
    LLMTimeoutError,
)
from app.llm.provider import LLMProvider
from app.schemas.analysis import AnalysisResult

logger = logging.getLogger(__name__)

VERDICTS = ("High", "Medium", "Low")
MAX_SKILLS = 15
DEFAULT_PROMPT_PATH = Path(__file__).resolve().parent.parent / "llm" / "prompts" / "resume_match_v1.md"

_FENCE_RE = re.compile(r"```(?:json)?\n?|\n?```")
_PLACEHOLDER_RE = re.compile(r"\{(jd_text|resume_text)\}")


# ============================================
# Prompt
# ============================================

def load_prompt_template(path: Optional[str] = None) -> str:
    """
    Load the scoring prompt template.

    ``ANALYSIS_PROMPT_PATH`` overrides the bundled template so the rubric can
    change without a code change.
    """
    prompt_path = Path(path or config.ANALYSIS_PROMPT_PATH or DEFAULT_PROMPT_PATH)
    try:
        return prompt_path.read_text(encoding="utf-8")
    except OSError as e:
        raise AnalysisError(f"Analysis prompt template could not be read: {prompt_path}") from e


def build_prompt(resume_text: str, jd_text: str, template: Optional[str] = None) -> str:
    """Substitute the trimmed texts into the ``{jd_text}``/``{resume_text}`` placeholders."""
    if template is None:
        template = load_prompt_template()
    values = {"jd_text": jd_text.strip(), "resume_text": resume_text.strip()}
    # single pass, so placeholders inside the inserted texts stay literal
    return _PLACEHOLDER_RE.sub(lambda match: values[match.group(1)], template)


# ============================================
# Response parsing
# ============================================

def _clamp_score(value: float) -> int:
    # compare before any float conversion; JSON ints are unbounded
    clamped = max(0, min(100, value))
    # half-up rounding
    return int(math.floor(clamped + 0.5))


def sanitize_skills(skills: List[Any]) -> List[str]:
    """Keep non-blank strings, trimmed, at most MAX_SKILLS of them."""
    cleaned = [skill.strip() for skill in skills if isinstance(skill, str) and skill.strip()]
    return cleaned[:MAX_SKILLS]


def parse_analysis_response(text: str) -> AnalysisResult:
    """
    Parse and validate the model reply.

    Raises:
        AnalysisParseError: no JSON object, invalid JSON, or wrong field types
    """
    cleaned = _FENCE_RE.sub("", (text or "").strip())

    start = cleaned.find("{")
    end = cleaned.rfind("}")
    if start == -1 or end == -1 or end < start:
        raise AnalysisParseError("Invalid response format: No JSON object found in response")

    try:
        data: Dict[str, Any] = json.loads(cleaned[start:end + 1])
    except json.JSONDecodeError as e:
        logger.warning(f"Failed to parse analysis JSON: {text[:200]}")
        raise AnalysisParseError(f"Failed to parse analysis response: {e.msg}") from e

    if not isinstance(data, dict):
        raise AnalysisParseError("Invalid analysis: expected a JSON object")

    score = data.get("score")
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        raise AnalysisParseError("Invalid analysis: score must be a number")
    if isinstance(score, float) and not math.isfinite(score):
        raise AnalysisParseError("Invalid analysis: score must be a number")

    verdict = data.get("verdict")
    if verdict not in VERDICTS:
        raise AnalysisParseError(f"Invalid analysis: verdict must be High, Medium, or Low, got: {verdict}")

    for key in ("matched_skills", "missing_skills"):
        if not isinstance(data.get(key), list):
            raise AnalysisParseError(f"Invalid analysis: {key} must be an array")

    return AnalysisResult(
        score=_clamp_score(score),
        verdict=verdict,
        matched_skills=sanitize_skills(data["matched_skills"]),
        missing_skills=sanitize_skills(data["missing_skills"]),
    )


# ============================================
# Provider error mapping
# ============================================

def _classify_provider_error(error: Exception) -> AnalysisError:
    """Map SDK/provider failures onto the pipeline's error categories."""
    if isinstance(error, (openai.AuthenticationError, openai.PermissionDeniedError)):
        return LLMAuthenticationError(
            "LLM API authentication failed. Please check the configured API key."
        )
    if isinstance(error, openai.RateLimitError):
        return LLMRateLimitError("LLM API rate limit exceeded. Please try again in a few minutes.")
    if isinstance(error, openai.APITimeoutError):
        return LLMTimeoutError("LLM API request timed out. Please try again.")

    message = str(error)
    lowered = message.lower()
    if "api key" in lowered or "authentication" in lowered:
        return LLMAuthenticationError(
            "LLM API authentication failed. Please check the configured API key."
        )
    if "rate limit" in lowered:
        return LLMRateLimitError("LLM API rate limit exceeded. Please try again in a few minutes.")
    if "timeout" in lowered or "timed out" in lowered:
        return LLMTimeoutError("LLM API request timed out. Please try again.")
    return AnalysisError(f"Analysis failed: {message or type(error).__name__}")


def _default_provider() -> LLMProvider:
    from app.llm.openai_provider import OpenAIProvider

    return OpenAIProvider()


# ============================================
# Entry point
# ============================================

def analyze_resume(
    resume_text: str,
    jd_text: str,
    provider: Optional[LLMProvider] = None,
) -> AnalysisResult:
    """
    Score a resume against a job description with one LLM call.

    Input and credential checks run before any network call.
    """
    if not resume_text or not resume_text.strip():
        raise AnalysisInputError("Resume text is required and cannot be empty")
    if not jd_text or not jd_text.strip():
        raise AnalysisInputError("Job description text is required and cannot be empty")

    if provider is None:
        if not config.LLM_API_KEY:
            raise LLMConfigurationError(
                "LLM API key is not set. Set LLM_API_KEY (or GROQ_API_KEY) in the environment."
            )
        provider = _default_provider()

    prompt = build_prompt(resume_text, jd_text)

    logger.info(
        f"Starting resume analysis: resume_chars={len(resume_text)}, jd_chars={len(jd_text)}, model={config.LLM_MODEL}"
    )

    try:
        response = provider.chat(
            messages=[{"role": "user", "content": prompt}],
            model=config.LLM_MODEL,
            temperature=config.LLM_TEMPERATURE,
        )
    except Exception as e:
        logger.error(f"Resume analysis call failed: {type(e).__name__}: {e}")
        raise _classify_provider_error(e) from e

    result = parse_analysis_response(response.content)

    logger.info(
        f"Resume analysis completed: score={result.score}, verdict={result.verdict}, "
        f"matched={len(result.matched_skills)}, missing={len(result.missing_skills)}"
    )
    return result


def get_llm_provider() -> Optional[LLMProvider]:
    """
    Provider dependency for the API layer.

    Returns None when no credential is configured; analyze_resume then fails
    with a configuration error after its input checks.
    """
    if not config.LLM_API_KEY:
        return None
    return _default_provider()
