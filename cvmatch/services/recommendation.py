"""
Job analysis: rank stored candidates against a job and phrase a
recommendation for the top one.

Prose generation is delegated to a NarrativeGenerator; when it fails the
recommendation is a fixed sentence, so analysis never fails on it.
"""
from typing import List, Optional, Protocol, Sequence

import requests

from cvmatch.helpers.prompts import (
    FALLBACK_RECOMMENDATION,
    NO_CANDIDATES_MESSAGE,
    NO_HIGHLIGHTS,
    NOT_SPECIFIED,
    RECOMMENDATION_PROMPT,
)
from cvmatch.models.models import CandidateProfile, JobAnalysisResult, JobRequirementSpec, MatchResult, RankingOutcome
from cvmatch.models.settings import LLMSettings, ScoringSettings, DEFAULT_SCORING
from cvmatch.services.ranking import rank_candidates
from cvmatch.services.store import JobAnalysisStore
from cvmatch.utils.exceptions import ExternalServiceError, FieldError, NotFoundError, ValidationError
from cvmatch.utils.logging_config import get_logger
from cvmatch.utils.text import is_blank
from cvmatch.utils.utils import ollama_generate

logger = get_logger(__name__)


class NarrativeGenerator(Protocol):
    def generate(self, prompt: str) -> str:
        ...


class OllamaNarrativeGenerator:
    """Calls a local Ollama server's /api/generate endpoint."""

    def __init__(self, settings: Optional[LLMSettings] = None):
        self.settings = settings or LLMSettings()

    def generate(self, prompt: str) -> str:
        try:
            return ollama_generate(prompt, self.settings)
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise ExternalServiceError(
                f"Ollama returned an error for model {self.settings.model_name}",
                service_name="ollama",
                status_code=status,
                cause=e,
            ) from e
        except requests.RequestException as e:
            raise ExternalServiceError(
                f"Could not reach Ollama at {self.settings.base_url}",
                service_name="ollama",
                cause=e,
            ) from e


def build_recommendation_prompt(job: JobRequirementSpec, top: MatchResult) -> str:
    return RECOMMENDATION_PROMPT.format(
        job_title=job.job_title,
        name=top.name,
        score=top.match_score,
        required_skills=", ".join(job.required_skills) if job.required_skills else NOT_SPECIFIED,
        experience_level=job.experience_level or NOT_SPECIFIED,
        education=job.education_requirement or NOT_SPECIFIED,
        highlights="; ".join(top.key_highlights) if top.key_highlights else NO_HIGHLIGHTS,
    )


def fallback_recommendation(top: MatchResult) -> str:
    return FALLBACK_RECOMMENDATION.format(name=top.name, score=top.match_score)


def generate_recommendation(
    job: JobRequirementSpec,
    outcome: RankingOutcome,
    generator: Optional[NarrativeGenerator] = None,
) -> str:
    if not outcome.has_candidates:
        return NO_CANDIDATES_MESSAGE

    top = outcome.top_candidate
    generator = generator or OllamaNarrativeGenerator()
    try:
        text = generator.generate(build_recommendation_prompt(job, top))
    except Exception as e:
        logger.warning(f"Failed to generate AI recommendation: {e}")
        return fallback_recommendation(top)

    if not text or not text.strip():
        logger.warning("Narrative generator returned an empty recommendation")
        return fallback_recommendation(top)
    return text.strip()


def validate_job_requirements(job: JobRequirementSpec) -> None:
    """Collects every violated job field before raising."""
    errors: List[FieldError] = []

    if is_blank(job.job_title):
        errors.append(FieldError("job_title", "Job title is required"))
    if is_blank(job.job_description):
        errors.append(FieldError("job_description", "Job description is required"))

    min_years, max_years = job.min_years_experience, job.max_years_experience
    if min_years is not None and min_years < 0:
        errors.append(FieldError("min_years_experience", "Minimum years of experience cannot be negative", min_years))
    if max_years is not None and max_years < 0:
        errors.append(FieldError("max_years_experience", "Maximum years of experience cannot be negative", max_years))
    if min_years is not None and max_years is not None and min_years > max_years:
        errors.append(FieldError("min_years_experience", "Minimum years cannot be greater than maximum years", min_years))

    if errors:
        logger.info(f"Job validation failed for fields: {[e.field for e in errors]}")
        raise ValidationError("Job requirements validation failed", errors=errors)


def analyze_job(
    job: JobRequirementSpec,
    candidates: Sequence[CandidateProfile],
    generator: Optional[NarrativeGenerator] = None,
    analysis_store: Optional[JobAnalysisStore] = None,
    settings: ScoringSettings = DEFAULT_SCORING,
) -> JobAnalysisResult:
    """
    Rank every candidate for ``job`` and attach a top-candidate recommendation.

    Args:
        job: job requirements to score against
        candidates: candidate records, typically ``store.find_all()``
        generator: prose generator; defaults to Ollama
        analysis_store: when given, the result is persisted there
        settings: scoring weights

    Returns:
        JobAnalysisResult with candidates in rank order; ``id`` is set when
        the result was persisted

    Raises:
        ValidationError: blank title/description or an invalid years range
    """
    validate_job_requirements(job)
    logger.info(f"Starting job analysis for: {job.job_title}")

    outcome = rank_candidates(job, candidates, settings=settings)
    recommendation = generate_recommendation(job, outcome, generator)

    result = JobAnalysisResult(
        job_title=job.job_title,
        job_description=job.job_description,
        required_skills=job.required_skills,
        preferred_skills=job.preferred_skills,
        experience_level=job.experience_level,
        education_requirement=job.education_requirement,
        min_years_experience=job.min_years_experience,
        max_years_experience=job.max_years_experience,
        total_candidates_analyzed=len(candidates),
        top_candidate_recommendation=recommendation,
        ranked_candidates=outcome.results,
    )

    if analysis_store is not None:
        analysis_id = analysis_store.save(result)
        result = result.model_copy(update={"id": analysis_id})
        logger.info(f"Job analysis saved with ID: {analysis_id}")

    logger.info(f"Job analysis completed. Analyzed {len(candidates)} candidates")
    return result


def get_job_analysis(store: JobAnalysisStore, analysis_id: str) -> JobAnalysisResult:
    result = store.find_by_id(analysis_id)
    if result is None:
        raise NotFoundError.job_analysis(analysis_id)
    return result
