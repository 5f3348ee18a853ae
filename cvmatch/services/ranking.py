from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

from cvmatch import config
from cvmatch.models.models import CandidateProfile, JobRequirementSpec, MatchResult, RankingOutcome
from cvmatch.models.settings import ScoringSettings, DEFAULT_SCORING
from cvmatch.services.matching import score_candidate
from cvmatch.utils.logging_config import PerformanceMonitor, get_logger
from cvmatch.utils.text import is_blank, truncate_text

logger = get_logger(__name__)


def key_highlights(
    job: JobRequirementSpec,
    candidate: CandidateProfile,
    settings: ScoringSettings = DEFAULT_SCORING,
) -> List[str]:
    """Matched required skills, years of experience, education snippet; in that order, each only when present."""
    highlights = []

    required = {s.lower() for s in job.required_skills}
    matching = [s for s in candidate.skills if s.lower() in required][:settings.highlight_skill_limit]
    if matching:
        highlights.append("Key skills: " + ", ".join(matching))

    if candidate.years_of_experience is not None:
        highlights.append(f"{candidate.years_of_experience} years of experience")

    if not is_blank(candidate.education_summary):
        education = truncate_text(candidate.education_summary, settings.education_snippet_length, "...")
        highlights.append(f"Education: {education}")

    return highlights


def _score_one(job: JobRequirementSpec, candidate: CandidateProfile, settings: ScoringSettings):
    return score_candidate(job, candidate, settings), key_highlights(job, candidate, settings)


def rank_candidates(
    job: JobRequirementSpec,
    candidates: Sequence[CandidateProfile],
    settings: ScoringSettings = DEFAULT_SCORING,
    max_workers: Optional[int] = None,
) -> RankingOutcome:
    """
    Score every candidate and order them by score, best first.

    Equal scores keep their input order. Scoring may run on a thread pool;
    results are collected in input order before sorting, so completion order
    never affects the ranking.
    """
    if not candidates:
        logger.info(f"No candidates to rank for job: {job.job_title}")
        return RankingOutcome(status="no_candidates", results=[])

    workers = max_workers if max_workers is not None else config.SCORING_MAX_WORKERS

    with PerformanceMonitor(f"Ranking {len(candidates)} candidates", logger=logger):
        if workers > 1 and len(candidates) > 1:
            with ThreadPoolExecutor(max_workers=workers) as pool:
                scored = list(pool.map(lambda c: _score_one(job, c, settings), candidates))
        else:
            scored = [_score_one(job, c, settings) for c in candidates]

        order = sorted(range(len(candidates)), key=lambda i: -scored[i][0])

        results = []
        for position, index in enumerate(order, start=1):
            candidate = candidates[index]
            score, highlights = scored[index]
            results.append(MatchResult(
                candidate_id=candidate.id,
                name=candidate.name,
                email=candidate.email,
                phone=candidate.phone,
                match_score=score,
                rank_position=position,
                key_highlights=highlights,
            ))

    logger.info(f"Ranked {len(results)} candidates for job: {job.job_title}")
    return RankingOutcome(status="ranked", results=results)
