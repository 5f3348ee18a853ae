"""
Heuristic extraction of experience, education and years of experience.

Nothing here raises for "not found": each extractor resolves to a sentinel
string or ``None``.
"""
import re
from typing import Callable, List, Optional

from cvmatch.models.settings import ExtractionSettings, DEFAULT_EXTRACTION
from cvmatch.utils.logging_config import get_logger

logger = get_logger(__name__)

EXPERIENCE_NOT_FOUND = "Experience details not clearly identified"
EDUCATION_NOT_FOUND = "Education details not clearly identified"

EXPERIENCE_PATTERN = re.compile(
    r"(experience|work history|employment|career)(.*?)(?=education|skills|references|$)",
    re.IGNORECASE | re.DOTALL,
)

EDUCATION_HEADER_PATTERN = re.compile(
    r"\b(education|academic|qualifications?|degrees?|diplomas?|certifications?|training|schooling|university|college)\b"
    r"[\s:]*\n?(.*?)"
    r"(?=\n\s*\b(experience|work|employment|skills|references|achievements|projects|languages)\b|$)",
    re.IGNORECASE | re.DOTALL,
)

DEGREE_PATTERN = re.compile(
    r"\b(bachelor'?s?|master'?s?|phd|doctorate|associate|diploma|certificate"
    r"|b\.?[a-z]{1,4}|m\.?[a-z]{1,4}|ph\.?d\.?)\s+(of|in|degree)\s+[a-zA-Z\s,]+",
    re.IGNORECASE,
)

INSTITUTION_PATTERN = re.compile(
    r"\b(university|college|institute|academy|school)\s+of\s+[a-zA-Z\s,]+"
    r"|[a-zA-Z\s,]+\s+(university|college|institute)",
    re.IGNORECASE,
)

YEARS_PATTERN = re.compile(r"(\d+)\+?\s*years?\s*(?:of\s*)?(?:experience|work)", re.IGNORECASE)


def extract_experience(cv_text: str, settings: ExtractionSettings = DEFAULT_EXTRACTION) -> str:
    """Content following the first experience-style header, up to the next section."""
    match = EXPERIENCE_PATTERN.search(cv_text or "")
    if match:
        return match.group(2).strip()[:settings.section_max_chars]
    return EXPERIENCE_NOT_FOUND


def _education_from_header(cv_text: str, settings: ExtractionSettings) -> Optional[str]:
    match = EDUCATION_HEADER_PATTERN.search(cv_text)
    if match:
        content = match.group(2).strip()
        if len(content) > settings.min_education_chars:
            return content[:settings.section_max_chars]
    return None


def _join_matches(pattern: re.Pattern, cv_text: str) -> Optional[str]:
    found = [m.group().strip() for m in pattern.finditer(cv_text)]
    return "; ".join(found) if found else None


def extract_education(cv_text: str, settings: ExtractionSettings = DEFAULT_EXTRACTION) -> str:
    """
    Education summary, trying in order: a section header, degree phrases,
    institution names. The first strategy that finds something wins.
    """
    cv_text = cv_text or ""
    strategies: List[Callable[[], Optional[str]]] = [
        lambda: _education_from_header(cv_text, settings),
        lambda: _join_matches(DEGREE_PATTERN, cv_text),
        lambda: _join_matches(INSTITUTION_PATTERN, cv_text),
    ]
    for strategy in strategies:
        result = strategy()
        if result:
            return result
    return EDUCATION_NOT_FOUND


def extract_years_of_experience(cv_text: str) -> Optional[int]:
    """First "<n>[+] years [of] experience|work" figure, or None."""
    match = YEARS_PATTERN.search(cv_text or "")
    if not match:
        return None
    try:
        return int(match.group(1))
    except ValueError:
        logger.warning(f"Could not parse years of experience: {match.group(1)[:20]}")
        return None
