from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional, Literal
from datetime import datetime
from enum import Enum


class SkillCategory(str, Enum):
    TECHNICAL = "technical"
    FRAMEWORK = "framework"
    DATABASE = "database"
    CLOUD_PLATFORM = "cloud_platform"
    METHODOLOGY = "methodology"
    SOFT_SKILL = "soft_skill"


class SkillEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    canonical_name: str
    category: SkillCategory


# -------- Candidates --------
class CandidateProfile(BaseModel):
    """Structured candidate record built from one CV; immutable once created."""
    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None  # assigned by the external store
    name: str
    email: str
    phone: Optional[str] = None
    cv_content: str
    source_file_name: str
    skills: List[str] = Field(default_factory=list)
    experience_summary: Optional[str] = None
    education_summary: Optional[str] = None
    years_of_experience: Optional[int] = Field(default=None, ge=0)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("skills")
    @classmethod
    def dedupe_skills(cls, v: List[str]) -> List[str]:
        return sorted(set(v))


# -------- Job requirements --------
class JobRequirementSpec(BaseModel):
    job_title: str = ""
    job_description: str = ""
    required_skills: List[str] = Field(default_factory=list)
    preferred_skills: List[str] = Field(default_factory=list)
    experience_level: Optional[str] = None
    education_requirement: Optional[str] = None
    min_years_experience: Optional[int] = None
    max_years_experience: Optional[int] = None

    @field_validator("required_skills", "preferred_skills")
    @classmethod
    def dedupe_preserving_order(cls, v: List[str]) -> List[str]:
        seen = set()
        out = []
        for s in v:
            key = s.lower()
            if key not in seen:
                seen.add(key)
                out.append(s)
        return out


# -------- Scoring / ranking --------
class ScoreBreakdown(BaseModel):
    skills: float
    experience: float
    education: float
    content: float
    total: float


class MatchResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    candidate_id: Optional[str] = None
    name: str
    email: str
    phone: Optional[str] = None
    match_score: float = Field(ge=0.0, le=100.0)
    rank_position: int = Field(ge=1)
    key_highlights: List[str] = Field(default_factory=list)


class RankingOutcome(BaseModel):
    status: Literal["ranked", "no_candidates"]
    results: List[MatchResult] = Field(default_factory=list)

    @property
    def has_candidates(self) -> bool:
        return self.status == "ranked"

    @property
    def top_candidate(self) -> Optional[MatchResult]:
        return self.results[0] if self.results else None


class JobAnalysisResult(BaseModel):
    id: Optional[str] = None  # assigned by the analysis store
    job_title: str
    job_description: str
    required_skills: List[str] = Field(default_factory=list)
    preferred_skills: List[str] = Field(default_factory=list)
    experience_level: Optional[str] = None
    education_requirement: Optional[str] = None
    min_years_experience: Optional[int] = None
    max_years_experience: Optional[int] = None
    total_candidates_analyzed: int
    top_candidate_recommendation: str
    ranked_candidates: List[MatchResult] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.utcnow)
