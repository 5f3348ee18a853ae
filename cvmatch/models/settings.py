"""
Settings Models for extraction, scoring and narrative generation
"""
from pydantic import BaseModel, Field, field_validator, ValidationInfo

from cvmatch import config


class ScoringSettings(BaseModel):
    """Match scorer weights and limits"""
    skills_weight: float = Field(default=0.40, ge=0.0, le=1.0, description="Weight for the skills sub-score")
    experience_weight: float = Field(default=0.30, ge=0.0, le=1.0, description="Weight for the experience sub-score")
    education_weight: float = Field(default=0.20, ge=0.0, le=1.0, description="Weight for the education sub-score")
    content_weight: float = Field(default=0.10, ge=0.0, le=1.0, description="Weight for the CV content relevance sub-score")

    required_skills_points: float = Field(default=70.0, ge=0.0, description="Skills sub-score points for required skills")
    preferred_skills_points: float = Field(default=30.0, ge=0.0, description="Skills sub-score points for preferred skills")

    max_score: float = Field(default=100.0, description="Upper bound of the final score")
    highlight_skill_limit: int = Field(default=3, ge=1, description="Matched skills listed in a highlight")
    education_snippet_length: int = Field(default=50, ge=1, description="Characters of education shown in a highlight")

    @field_validator('content_weight')
    @classmethod
    def validate_total_weights(cls, v, info: ValidationInfo):
        total = v + sum(info.data.get(k, 0) for k in ("skills_weight", "experience_weight", "education_weight"))
        if abs(total - 1.0) > 0.01:  # Allow small floating point errors
            raise ValueError('Scoring weights must sum to 1.0')
        return v


class ExtractionSettings(BaseModel):
    """Section extraction limits"""
    section_max_chars: int = Field(default=1000, ge=1, description="Truncation for experience/education sections")
    min_education_chars: int = Field(default=10, ge=0, description="Header-captured education must be longer than this")
    context_fragment_min: int = Field(default=3, ge=1)
    context_fragment_max: int = Field(default=29, ge=1)


class NLPSettings(BaseModel):
    """Optional NLP annotation capability"""
    enabled: bool = Field(default_factory=lambda: config.NLP_ENABLED)
    model_name: str = Field(default_factory=lambda: config.SPACY_MODEL, description="spaCy pipeline to load")


class LLMSettings(BaseModel):
    """Narrative generation (Ollama) settings"""
    model_name: str = Field(default_factory=lambda: config.LLM_MODEL, description="LLM model name")
    base_url: str = Field(default_factory=lambda: config.OLLAMA, description="Ollama base URL")
    temperature: float = Field(default=0.2, ge=0.0, le=2.0, description="Generation temperature")
    timeout: int = Field(default_factory=lambda: config.LLM_TIMEOUT, ge=1, le=300, description="Request timeout in seconds")


DEFAULT_SCORING = ScoringSettings()
DEFAULT_EXTRACTION = ExtractionSettings()
