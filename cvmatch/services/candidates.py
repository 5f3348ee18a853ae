"""
Candidate record building and the candidate service over an external store.
"""
from typing import List, Optional

from cvmatch.models.models import CandidateProfile
from cvmatch.services import sections
from cvmatch.services.skill_extractor import extract_skills
from cvmatch.services.store import CandidateStore
from cvmatch.utils.exceptions import (
    CVMatchBaseException,
    FieldError,
    NotFoundError,
    SaveError,
    ValidationError,
)
from cvmatch.utils.logging_config import get_logger
from cvmatch.utils.text import is_blank, sanitize_text

logger = get_logger(__name__)


def is_valid_email(email: Optional[str]) -> bool:
    return email is not None and "@" in email and "." in email and len(email) > 5


def validate_candidate_inputs(
    name: Optional[str],
    email: Optional[str],
    cv_text: Optional[str],
    file_name: Optional[str],
    years_of_experience: Optional[int],
) -> None:
    """Collects every violated field before raising."""
    errors: List[FieldError] = []

    if is_blank(name):
        errors.append(FieldError("name", "Name is required"))

    if is_blank(email):
        errors.append(FieldError("email", "Email is required"))
    elif not is_valid_email(email):
        errors.append(FieldError("email", "Email format is invalid", email))

    if is_blank(cv_text):
        errors.append(FieldError("cv_content", "CV content is required"))

    if is_blank(file_name):
        errors.append(FieldError("source_file_name", "Original file name is required"))

    if years_of_experience is not None and years_of_experience < 0:
        errors.append(FieldError("years_of_experience", "Years of experience cannot be negative", years_of_experience))

    if errors:
        logger.info(f"Candidate validation failed for fields: {[e.field for e in errors]}")
        raise ValidationError("Candidate validation failed", errors=errors)


def _sanitize_optional(value: Optional[str]) -> Optional[str]:
    return None if is_blank(value) else sanitize_text(value)


def build_candidate_profile(
    name: str,
    email: str,
    phone: Optional[str],
    cv_text: str,
    file_name: str,
    skills: Optional[List[str]] = None,
    experience: Optional[str] = None,
    education: Optional[str] = None,
    years_of_experience: Optional[int] = None,
    candidate_id: Optional[str] = None,
) -> CandidateProfile:
    """
    Sanitize identity fields, validate the sanitized values and assemble a
    CandidateProfile from them.

    Raises:
        ValidationError: listing every blank/invalid required field
    """
    name = sanitize_text(name)
    email = sanitize_text(email)
    cv_text = sanitize_text(cv_text)
    file_name = sanitize_text(file_name)
    validate_candidate_inputs(name, email, cv_text, file_name, years_of_experience)

    return CandidateProfile(
        id=candidate_id,
        name=name,
        email=email,
        phone=sanitize_text(phone) if phone is not None else None,
        cv_content=cv_text,
        source_file_name=file_name,
        skills=list(skills or []),
        experience_summary=_sanitize_optional(experience),
        education_summary=_sanitize_optional(education),
        years_of_experience=years_of_experience,
    )


class CandidateService:
    """Builds, stores and looks up candidates through a CandidateStore."""

    def __init__(self, store: CandidateStore, skill_extractor=None):
        self.store = store
        self._extract_skills = skill_extractor or extract_skills

    def process_cv(
        self,
        cv_text: str,
        file_name: str,
        name: str,
        email: str,
        phone: Optional[str] = None,
    ) -> CandidateProfile:
        """Run the extraction pipeline over raw CV text and persist the result."""
        logger.info(f"Processing CV for candidate: {name} ({email})")
        content = sanitize_text(cv_text)

        skills = self._extract_skills(content)
        experience = sections.extract_experience(content)
        education = sections.extract_education(content)
        years = sections.extract_years_of_experience(content)

        logger.debug(f"Extracted skills: {skills}")
        logger.debug(f"Extracted years of experience: {years}")

        return self.save_candidate(
            name, email, phone, content, file_name,
            skills=skills, experience=experience, education=education,
            years_of_experience=years,
        )

    def save_candidate(
        self,
        name: str,
        email: str,
        phone: Optional[str],
        cv_text: str,
        file_name: str,
        skills: Optional[List[str]] = None,
        experience: Optional[str] = None,
        education: Optional[str] = None,
        years_of_experience: Optional[int] = None,
    ) -> CandidateProfile:
        candidate = build_candidate_profile(
            name, email, phone, cv_text, file_name,
            skills=skills, experience=experience, education=education,
            years_of_experience=years_of_experience,
        )

        try:
            saved = self.store.save(candidate)
        except CVMatchBaseException:
            raise
        except Exception as e:
            logger.error(f"Failed to save candidate with email: {candidate.email}: {e}")
            raise SaveError(
                "Failed to save candidate",
                candidate_name=candidate.name,
                candidate_email=candidate.email,
                cause=e,
            ) from e

        logger.info(f"Candidate saved successfully with ID: {saved.id} and email: {saved.email}")
        return saved

    def get_all_candidates(self) -> List[CandidateProfile]:
        return self.store.find_all()

    def get_candidate(self, candidate_id: str) -> CandidateProfile:
        if is_blank(candidate_id):
            raise ValidationError("Candidate ID cannot be empty", errors=[FieldError("candidate_id", "Candidate ID is required")])
        candidate = self.store.find_by_id(candidate_id)
        if candidate is None:
            raise NotFoundError.candidate(candidate_id)
        return candidate

    def find_by_email(self, email: str) -> CandidateProfile:
        if is_blank(email):
            raise ValidationError("Email cannot be empty", errors=[FieldError("email", "Email is required")])
        candidate = self.store.find_by_email(email)
        if candidate is None:
            raise NotFoundError.candidate_by_email(email)
        return candidate

    def delete_candidate(self, candidate_id: str) -> None:
        if is_blank(candidate_id):
            raise ValidationError("Candidate ID cannot be empty", errors=[FieldError("candidate_id", "Candidate ID is required")])
        if not self.store.exists(candidate_id):
            raise NotFoundError.candidate(candidate_id)
        self.store.delete(candidate_id)
        logger.info(f"Candidate deleted successfully with ID: {candidate_id}")

    def find_by_years_of_experience(
        self, min_years: Optional[int] = None, max_years: Optional[int] = None
    ) -> List[CandidateProfile]:
        errors: List[FieldError] = []
        if min_years is not None and min_years < 0:
            errors.append(FieldError("min_years", "Minimum years of experience cannot be negative", min_years))
        if max_years is not None and max_years < 0:
            errors.append(FieldError("max_years", "Maximum years of experience cannot be negative", max_years))
        if min_years is not None and max_years is not None and min_years > max_years:
            errors.append(FieldError("min_years", "Minimum years cannot be greater than maximum years", min_years))
        if errors:
            raise ValidationError("Invalid years of experience range", errors=errors)

        low = min_years if min_years is not None else 0
        return [
            c for c in self.store.find_all()
            if c.years_of_experience is not None
            and c.years_of_experience >= low
            and (max_years is None or c.years_of_experience <= max_years)
        ]

    def search_by_name(self, name: str) -> List[CandidateProfile]:
        if is_blank(name):
            raise ValidationError("Search name cannot be empty", errors=[FieldError("name", "Search name is required")])
        needle = name.strip().lower()
        return [c for c in self.store.find_all() if needle in c.name.lower()]
