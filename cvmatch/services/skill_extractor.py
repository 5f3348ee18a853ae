"""
Skill extraction from sanitized CV text.

Three independent passes are unioned, canonicalized and filtered:
  1. lexical: tokens (optionally POS/NER tagged) that are known or technical terms
  2. pattern: curated technology regex plus "<word> [v]<version>" mentions
  3. context: skill-list lines and experience sentences

If that yields nothing, or anything goes wrong, a fixed keyword list is
matched by substring instead. Extraction never raises.
"""
import re
from typing import Iterable, List, Optional, Set

from cvmatch.helpers import skill_taxonomy as taxonomy
from cvmatch.models.settings import ExtractionSettings, DEFAULT_EXTRACTION
from cvmatch.services.nlp import Annotator, Token, ORGANIZATION_LABELS, get_default_annotator
from cvmatch.utils.exceptions import ExtractionDegraded
from cvmatch.utils.logging_config import get_logger, log_function_call

logger = get_logger(__name__)

TECH_PATTERN = re.compile(
    r"\b(" + "|".join(re.escape(t) for t in taxonomy.PATTERN_TERMS) + r")\b",
    re.IGNORECASE,
)
VERSION_PATTERN = re.compile(r"\b([a-zA-Z]+)\s*[vV]?\d+(?:\.\d+)*\b")
VALID_SKILL_CHARS = re.compile(r"[a-zA-Z0-9\s.\-+#]*")
CONTEXT_SPLIT = re.compile(r"[,;•\-*]")
BULLET_RESIDUE = re.compile(r"^[\s•\-*]+")

SKILL_LINE_MARKERS = ("skills", "technologies", "technical", "proficient")
EXPERIENCE_LINE_MARKERS = ("experience", "worked with", "using", "developed")


class RegexTokenizer:
    """Untagged tokenizer used when no NLP pipeline is available."""

    TOKEN = re.compile(r"[A-Za-z0-9][A-Za-z0-9.+#/\-]*[A-Za-z0-9+#]|[A-Za-z0-9]")

    def annotate(self, text: str) -> List[Token]:
        return [Token(text=m.group()) for m in self.TOKEN.finditer(text)]


def is_valid_skill(skill: Optional[str]) -> bool:
    if skill is None or not skill.strip():
        return False
    clean = skill.strip()
    if len(clean) < 2 or len(clean) > 25:
        return False
    if not VALID_SKILL_CHARS.fullmatch(clean):
        return False
    return taxonomy.is_known_skill(clean) or taxonomy.is_technical_term(clean)


class SkillExtractor:
    """
    Extracts canonical skill names from CV text.

    Args:
        annotator: NLP annotation capability; ``None`` selects the configured
            spaCy pipeline, falling back to a plain regex tokenizer.
        settings: fragment length limits for the context pass
    """

    def __init__(self, annotator: Optional[Annotator] = None, settings: ExtractionSettings = None):
        self._annotator = annotator
        self.settings = settings or DEFAULT_EXTRACTION

    @property
    def annotator(self) -> Annotator:
        if self._annotator is None:
            self._annotator = get_default_annotator() or RegexTokenizer()
        return self._annotator

    def extract(self, cv_text: str) -> List[str]:
        try:
            skills = self._extract_all(cv_text or "")
            logger.debug(f"Extracted {len(skills)} skills: {skills}")
            return skills
        except ExtractionDegraded as e:
            logger.warning(f"Skill extraction degraded ({e.details.get('stage')}): {e.message}")
        except Exception as e:
            logger.warning(f"Error during skill extraction, using keyword fallback: {e}", exc_info=True)
        return extract_skills_simple(cv_text or "")

    def _extract_all(self, cv_text: str) -> List[str]:
        found: Set[str] = set()
        found |= self.lexical_pass(cv_text)
        found |= self.pattern_pass(cv_text)
        found |= self.context_pass(cv_text)

        skills = filter_skills(found)
        if not skills:
            raise ExtractionDegraded("No skills recognized by lexical, pattern or context passes", stage="filter")
        return skills

    def lexical_pass(self, cv_text: str) -> Set[str]:
        try:
            tokens = self.annotator.annotate(cv_text)
        except Exception as e:
            logger.warning(f"NLP annotation failed, tokenizing with regex instead: {e}")
            tokens = RegexTokenizer().annotate(cv_text)

        skills: Set[str] = set()
        for token in tokens:
            word = token.text
            if taxonomy.is_known_skill(word):
                skills.add(word)
            elif token.ner in ORGANIZATION_LABELS and taxonomy.is_technical_term(word):
                skills.add(word)
            elif token.pos and (token.pos.startswith("NNP") or token.pos == "NN") and taxonomy.is_technical_term(word):
                skills.add(word)
        return skills

    def pattern_pass(self, cv_text: str) -> Set[str]:
        skills = {m.group() for m in TECH_PATTERN.finditer(cv_text)}
        for m in VERSION_PATTERN.finditer(cv_text):
            word = m.group(1)
            if taxonomy.is_technical_term(word):
                skills.add(word)
        return skills

    def context_pass(self, cv_text: str) -> Set[str]:
        skills: Set[str] = set()
        known = taxonomy.all_canonical_names()
        lo, hi = self.settings.context_fragment_min, self.settings.context_fragment_max

        for line in cv_text.split("\n"):
            lower_line = line.lower()

            if any(marker in lower_line for marker in SKILL_LINE_MARKERS):
                for fragment in CONTEXT_SPLIT.split(line):
                    fragment = BULLET_RESIDUE.sub("", fragment.strip())
                    if lo <= len(fragment) <= hi and is_valid_skill(fragment):
                        skills.add(fragment)

            if any(marker in lower_line for marker in EXPERIENCE_LINE_MARKERS):
                for key, canonical in known.items():
                    if key in lower_line:
                        skills.add(canonical)
        return skills


def filter_skills(candidates: Iterable[str]) -> List[str]:
    """Canonicalize, drop invalid entries, dedupe and sort."""
    out = set()
    for raw in candidates:
        if not raw or len(raw.strip()) < 2:
            continue
        skill = taxonomy.canonicalize(raw)
        if is_valid_skill(skill):
            out.add(skill)
    return sorted(out)


def extract_skills_simple(cv_text: str) -> List[str]:
    """Keyword-list fallback: case-insensitive substring containment."""
    lower = (cv_text or "").lower()
    return sorted(skill for skill in taxonomy.FALLBACK_SKILLS if skill.lower() in lower)


_default_extractor: Optional[SkillExtractor] = None


def get_default_extractor() -> SkillExtractor:
    global _default_extractor
    if _default_extractor is None:
        _default_extractor = SkillExtractor()
    return _default_extractor


@log_function_call
def extract_skills(cv_text: str, annotator: Optional[Annotator] = None) -> List[str]:
    """Extract a sorted, de-duplicated list of canonical skill names."""
    extractor = SkillExtractor(annotator=annotator) if annotator is not None else get_default_extractor()
    return extractor.extract(cv_text)
