"""
Optional NLP annotation capability (tokenize / POS / NER) backed by spaCy.

Skill extraction works without it; any failure here only removes the
lexical pass from extraction.
"""
from functools import lru_cache
from typing import List, NamedTuple, Optional, Protocol

import spacy

from cvmatch.models.settings import NLPSettings
from cvmatch.utils.logging_config import get_logger

logger = get_logger(__name__)

ORGANIZATION_LABELS = frozenset({"ORG", "ORGANIZATION"})


class Token(NamedTuple):
    text: str
    pos: Optional[str] = None  # Penn Treebank tag, e.g. NNP
    ner: Optional[str] = None  # entity label, e.g. ORG


class Annotator(Protocol):
    def annotate(self, text: str) -> List[Token]:
        ...


class SpacyAnnotator:
    """Wraps a loaded spaCy pipeline; safe to share across threads for reads."""

    def __init__(self, nlp):
        self._nlp = nlp

    def annotate(self, text: str) -> List[Token]:
        doc = self._nlp(text)
        return [
            Token(text=t.text, pos=t.tag_ or None, ner=t.ent_type_ or None)
            for t in doc
            if not t.is_space
        ]


@lru_cache(maxsize=4)
def _load_annotator(model_name: str) -> Optional[Annotator]:
    """Lazy-load the spaCy model once per process; a missing model is remembered too."""
    try:
        nlp = spacy.load(model_name)
    except OSError as e:
        logger.warning(f"spaCy model '{model_name}' unavailable, using pattern-only extraction: {e}")
        return None
    logger.info(f"Loaded spaCy model '{model_name}' for skill extraction")
    return SpacyAnnotator(nlp)


def get_default_annotator(settings: NLPSettings = None) -> Optional[Annotator]:
    settings = settings or NLPSettings()
    if not settings.enabled:
        logger.debug("NLP annotation disabled by configuration")
        return None
    return _load_annotator(settings.model_name)
