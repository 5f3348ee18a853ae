import pytest
import requests
from unittest.mock import MagicMock, patch

from cvmatch.models.models import JobRequirementSpec
from cvmatch.models.settings import LLMSettings
from cvmatch.services.recommendation import (
    OllamaNarrativeGenerator,
    analyze_job,
    build_recommendation_prompt,
    generate_recommendation,
    get_job_analysis,
)
from cvmatch.services.ranking import rank_candidates
from cvmatch.services.store import InMemoryJobAnalysisStore
from cvmatch.utils.exceptions import ExternalServiceError, NotFoundError, ValidationError


@pytest.fixture
def strong_candidate(make_candidate):
    return make_candidate(
        id="top",
        name="Alice Smith",
        email="alice@example.com",
        cv_content="Java Spring backend engineer",
        skills=["Java", "PostgreSQL", "Spring"],
        years_of_experience=5,
        education_summary="Bachelor of Science in Computer Science",
    )


class TestOllamaNarrativeGenerator:
    """Test cases for the Ollama-backed generator"""

    @patch("cvmatch.utils.utils.requests.post")
    def test_generate_success(self, mock_post):
        mock_post.return_value.json.return_value = {"response": "Alice is a great fit."}
        settings = LLMSettings(model_name="llama3", base_url="http://ollama:11434", timeout=5)

        text = OllamaNarrativeGenerator(settings).generate("prompt")

        assert text == "Alice is a great fit."
        args, kwargs = mock_post.call_args
        assert args[0] == "http://ollama:11434/api/generate"
        assert kwargs["json"]["model"] == "llama3"
        assert kwargs["json"]["stream"] is False
        assert kwargs["timeout"] == 5

    @patch("cvmatch.utils.utils.requests.post")
    def test_connection_error(self, mock_post):
        mock_post.side_effect = requests.ConnectionError("refused")

        with pytest.raises(ExternalServiceError) as exc_info:
            OllamaNarrativeGenerator(LLMSettings()).generate("prompt")
        assert exc_info.value.details["service_name"] == "ollama"

    @patch("cvmatch.utils.utils.requests.post")
    def test_http_error_keeps_status(self, mock_post):
        response = MagicMock(status_code=503)
        mock_post.return_value.raise_for_status.side_effect = requests.HTTPError("unavailable", response=response)

        with pytest.raises(ExternalServiceError) as exc_info:
            OllamaNarrativeGenerator(LLMSettings()).generate("prompt")
        assert exc_info.value.details["status_code"] == 503


class TestGenerateRecommendation:
    def test_prompt_contents(self, backend_job, strong_candidate):
        top = rank_candidates(backend_job, [strong_candidate]).top_candidate
        prompt = build_recommendation_prompt(backend_job, top)

        assert 'job analysis for "Backend Engineer"' in prompt
        assert "Alice Smith with a match score of 100.0%" in prompt
        assert "- Required Skills: Java, Spring" in prompt
        assert "- Experience Level: Mid" in prompt
        assert "Key skills: Java, Spring; 5 years of experience" in prompt

    def test_uses_generator_text(self, backend_job, strong_candidate):
        generator = MagicMock()
        generator.generate.return_value = "  Alice is recommended.  "
        outcome = rank_candidates(backend_job, [strong_candidate])

        assert generate_recommendation(backend_job, outcome, generator) == "Alice is recommended."

    def test_generator_failure_uses_fallback(self, backend_job, strong_candidate):
        generator = MagicMock()
        generator.generate.side_effect = ExternalServiceError("down", service_name="ollama")
        outcome = rank_candidates(backend_job, [strong_candidate])

        assert generate_recommendation(backend_job, outcome, generator) == (
            "Alice Smith is the top candidate with a 100.0% match score based on the analysis criteria."
        )

    def test_no_candidates_skips_generator(self, backend_job):
        generator = MagicMock()
        outcome = rank_candidates(backend_job, [])

        assert generate_recommendation(backend_job, outcome, generator) == "No candidates found in the database."
        generator.generate.assert_not_called()


class TestAnalyzeJob:
    """Test cases for job analysis"""

    def test_analyze_and_store(self, backend_job, strong_candidate, make_candidate):
        generator = MagicMock()
        generator.generate.return_value = "Hire Alice."
        store = InMemoryJobAnalysisStore()
        weaker = make_candidate(id="low", name="Bob", email="bob@example.com")

        result = analyze_job(backend_job, [weaker, strong_candidate], generator=generator, analysis_store=store)

        assert result.job_title == "Backend Engineer"
        assert result.total_candidates_analyzed == 2
        assert result.top_candidate_recommendation == "Hire Alice."
        assert [r.candidate_id for r in result.ranked_candidates] == ["top", "low"]
        assert result.preferred_skills == ["PostgreSQL"]
        assert result.id is not None
        assert get_job_analysis(store, result.id).top_candidate_recommendation == "Hire Alice."

    def test_unsaved_result_has_no_id(self, backend_job):
        assert analyze_job(backend_job, [], generator=MagicMock()).id is None

    def test_rejects_invalid_job(self):
        generator = MagicMock()
        job = JobRequirementSpec(job_title=" ", job_description="", min_years_experience=-4, max_years_experience=-6)

        with pytest.raises(ValidationError) as exc_info:
            analyze_job(job, [], generator=generator)

        assert exc_info.value.fields == [
            "job_title",
            "job_description",
            "min_years_experience",
            "max_years_experience",
            "min_years_experience",
        ]
        generator.generate.assert_not_called()

    def test_rejects_inverted_years_range(self, backend_job):
        job = backend_job.model_copy(update={"min_years_experience": 8, "max_years_experience": 2})
        with pytest.raises(ValidationError) as exc_info:
            analyze_job(job, [], generator=MagicMock())
        assert exc_info.value.fields == ["min_years_experience"]

    def test_analyze_without_candidates(self, backend_job):
        result = analyze_job(backend_job, [], generator=MagicMock())
        assert result.total_candidates_analyzed == 0
        assert result.ranked_candidates == []
        assert result.top_candidate_recommendation == "No candidates found in the database."

    def test_get_job_analysis(self, backend_job):
        store = InMemoryJobAnalysisStore()
        analysis_id = store.save(analyze_job(backend_job, [], generator=MagicMock()))

        assert get_job_analysis(store, analysis_id).job_title == "Backend Engineer"
        with pytest.raises(NotFoundError):
            get_job_analysis(store, "missing")
