import pytest

from cvmatch.models.models import CandidateProfile, JobRequirementSpec
from cvmatch.services import skill_extractor
from cvmatch.services.store import InMemoryCandidateStore


SAMPLE_CV = """Jane Doe
jane.doe@example.com

Summary
Backend engineer with 5 years of experience building services.
Skills: Java, Spring, PostgreSQL

Education
Bachelor of Science in Computer Science
"""


class FakeAnnotator:
    """Returns canned tokens regardless of input."""

    def __init__(self, tokens=None, error=None):
        self.tokens = tokens or []
        self.error = error
        self.calls = 0

    def annotate(self, text):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.tokens)


@pytest.fixture(autouse=True)
def no_spacy_model(monkeypatch):
    """Keep tests independent of an installed spaCy model."""
    monkeypatch.setattr(skill_extractor, "get_default_annotator", lambda settings=None: None)
    monkeypatch.setattr(skill_extractor, "_default_extractor", None)


@pytest.fixture
def sample_cv():
    return SAMPLE_CV


@pytest.fixture
def fake_annotator():
    return FakeAnnotator


@pytest.fixture
def make_candidate():
    def _make(**overrides):
        data = {
            "id": "c-1",
            "name": "Jane Doe",
            "email": "jane.doe@example.com",
            "cv_content": "Backend engineer",
            "source_file_name": "jane.pdf",
        }
        data.update(overrides)
        return CandidateProfile(**data)
    return _make


@pytest.fixture
def backend_job():
    return JobRequirementSpec(
        job_title="Backend Engineer",
        job_description="Java Spring backend engineer",
        required_skills=["Java", "Spring"],
        preferred_skills=["PostgreSQL"],
        experience_level="Mid",
        education_requirement="Bachelor",
        min_years_experience=3,
    )


@pytest.fixture
def candidate_store():
    return InMemoryCandidateStore()
