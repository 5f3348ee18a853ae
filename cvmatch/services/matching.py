"""
Deterministic candidate/job match scoring.

All functions are pure: same inputs, same score, no I/O, no exceptions for
missing data. Sub-scores are on a 0-100 scale.
"""
from typing import Iterable, Optional

from cvmatch.models.models import CandidateProfile, JobRequirementSpec, ScoreBreakdown
from cvmatch.models.settings import ScoringSettings, DEFAULT_SCORING
from cvmatch.utils.text import is_blank

NEUTRAL_EXPERIENCE_SCORE = 50.0
MISSING_EDUCATION_SCORE = 30.0
PARTIAL_EDUCATION_SCORE = 50.0
LOWER_DEGREE_SCORE = 70.0


def _coverage(wanted: Iterable[str], have: set) -> Optional[float]:
    wanted = list(wanted or [])
    if not wanted:
        return None
    matched = sum(1 for s in wanted if s.lower() in have)
    return matched / len(wanted)


def skills_score(
    job: JobRequirementSpec,
    candidate: CandidateProfile,
    settings: ScoringSettings = DEFAULT_SCORING,
) -> float:
    """Required skills are worth 70 points, preferred 30; a missing list contributes 0."""
    if not candidate.skills:
        return 0.0

    have = {s.lower() for s in candidate.skills}
    required = _coverage(job.required_skills, have)
    preferred = _coverage(job.preferred_skills, have)

    score = 0.0
    if required is not None:
        score += required * settings.required_skills_points
    if preferred is not None:
        score += preferred * settings.preferred_skills_points
    return score


def experience_score(job: JobRequirementSpec, candidate: CandidateProfile) -> float:
    years = candidate.years_of_experience
    if years is None:
        return NEUTRAL_EXPERIENCE_SCORE

    min_years, max_years = job.min_years_experience, job.max_years_experience
    if min_years is None and max_years is None:
        return 100.0

    if min_years is not None and years < min_years:
        return max(0.0, 100.0 - (min_years - years) * 10.0)

    if max_years is not None and years > max_years:
        return max(50.0, 100.0 - (years - max_years) * 5.0)

    return 100.0


def education_score(job: JobRequirementSpec, candidate: CandidateProfile) -> float:
    if is_blank(job.education_requirement):
        return 100.0

    if is_blank(candidate.education_summary):
        return MISSING_EDUCATION_SCORE

    have = candidate.education_summary.lower()
    required = job.education_requirement.lower()

    if required in have:
        return 100.0

    # A higher degree satisfies a lower requirement; the reverse earns partial credit
    if "bachelor" in required and "master" in have:
        return 100.0
    if "master" in required and "bachelor" in have:
        return LOWER_DEGREE_SCORE

    return PARTIAL_EDUCATION_SCORE


def content_relevance_score(job: JobRequirementSpec, candidate: CandidateProfile) -> float:
    """
    Share of job-description words (longer than 3 chars) found in the CV, doubled
    and capped at 100. The denominator counts every description token.
    """
    if is_blank(candidate.cv_content):
        return 0.0

    keywords = (job.job_description or "").lower().split()
    if not keywords:
        return 0.0

    cv_content = candidate.cv_content.lower()
    match_count = sum(1 for k in keywords if len(k) > 3 and k in cv_content)
    return min(100.0, match_count / len(keywords) * 200.0)


def score_breakdown(
    job: JobRequirementSpec,
    candidate: CandidateProfile,
    settings: ScoringSettings = DEFAULT_SCORING,
) -> ScoreBreakdown:
    skills = skills_score(job, candidate, settings)
    experience = experience_score(job, candidate)
    education = education_score(job, candidate)
    content = content_relevance_score(job, candidate)

    total = (
        skills * settings.skills_weight
        + experience * settings.experience_weight
        + education * settings.education_weight
        + content * settings.content_weight
    )
    return ScoreBreakdown(
        skills=skills,
        experience=experience,
        education=education,
        content=content,
        total=max(0.0, min(total, settings.max_score)),
    )


def score_candidate(
    job: JobRequirementSpec,
    candidate: CandidateProfile,
    settings: ScoringSettings = DEFAULT_SCORING,
) -> float:
    """Weighted 0-100 match score of a candidate against a job."""
    return score_breakdown(job, candidate, settings).total
