"""
Public entry points of the CV matching core.

    from cvmatch.main import extract_skills, rank_candidates

Call ``configure_for_environment()`` once at startup to install logging
handlers; importing this module does not touch logging configuration.
"""
from cvmatch.helpers.parsing import extract_document_text
from cvmatch.models.models import (
    CandidateProfile,
    JobAnalysisResult,
    JobRequirementSpec,
    MatchResult,
    RankingOutcome,
    ScoreBreakdown,
)
from cvmatch.models.settings import ExtractionSettings, LLMSettings, NLPSettings, ScoringSettings
from cvmatch.services.candidates import CandidateService, build_candidate_profile
from cvmatch.services.matching import score_breakdown, score_candidate
from cvmatch.services.ranking import key_highlights, rank_candidates
from cvmatch.services.recommendation import OllamaNarrativeGenerator, analyze_job, get_job_analysis
from cvmatch.services.sections import extract_education, extract_experience, extract_years_of_experience
from cvmatch.services.skill_extractor import extract_skills
from cvmatch.services.store import InMemoryCandidateStore, InMemoryJobAnalysisStore
from cvmatch.utils.logging_config import configure_for_environment, get_logger
from cvmatch.utils.text import sanitize_text

__all__ = [
    "CandidateProfile",
    "CandidateService",
    "ExtractionSettings",
    "InMemoryCandidateStore",
    "InMemoryJobAnalysisStore",
    "JobAnalysisResult",
    "JobRequirementSpec",
    "LLMSettings",
    "MatchResult",
    "NLPSettings",
    "OllamaNarrativeGenerator",
    "RankingOutcome",
    "ScoreBreakdown",
    "ScoringSettings",
    "analyze_job",
    "build_candidate_profile",
    "configure_for_environment",
    "extract_document_text",
    "extract_education",
    "extract_experience",
    "extract_skills",
    "extract_years_of_experience",
    "get_job_analysis",
    "get_logger",
    "key_highlights",
    "rank_candidates",
    "sanitize_text",
    "score_breakdown",
    "score_candidate",
]
