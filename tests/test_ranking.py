import pytest

from cvmatch.models.models import JobRequirementSpec
from cvmatch.services.ranking import key_highlights, rank_candidates


@pytest.fixture
def python_job():
    return JobRequirementSpec(
        job_title="Python Developer",
        job_description="Python",
        required_skills=["Python", "Java", "Django", "Go"],
        min_years_experience=2,
    )


class TestKeyHighlights:
    """Test cases for key highlight generation"""

    def test_all_highlights_in_order(self, python_job, make_candidate):
        education = "Bachelor of Science in Computer Science, University College Dublin"
        candidate = make_candidate(
            skills=["AWS", "Django", "Java", "Python"],
            years_of_experience=5,
            education_summary=education,
        )

        assert key_highlights(python_job, candidate) == [
            "Key skills: Django, Java, Python",
            "5 years of experience",
            f"Education: {education[:50]}...",
        ]

    def test_matched_skills_capped_at_three(self, python_job, make_candidate):
        candidate = make_candidate(skills=["Django", "Go", "Java", "Python"])
        assert key_highlights(python_job, candidate) == ["Key skills: Django, Go, Java"]

    def test_short_education_not_truncated(self, python_job, make_candidate):
        candidate = make_candidate(education_summary="BSc Physics")
        assert key_highlights(python_job, candidate) == ["Education: BSc Physics"]

    def test_no_data_no_highlights(self, python_job, make_candidate):
        assert key_highlights(python_job, make_candidate(skills=["Rust"])) == []


class TestRankCandidates:
    """Test cases for candidate ranking"""

    def test_empty_candidates(self, python_job):
        outcome = rank_candidates(python_job, [])
        assert outcome.status == "no_candidates"
        assert not outcome.has_candidates
        assert outcome.results == []
        assert outcome.top_candidate is None

    @pytest.mark.parametrize("max_workers", [1, 4])
    def test_orders_by_score_with_stable_ties(self, python_job, make_candidate, max_workers):
        tie_a = make_candidate(id="a", name="Alice", email="alice@example.com", skills=["Python"])
        strong = make_candidate(id="b", name="Bob", email="bob@example.com", skills=["Python", "Java", "Django"], years_of_experience=4)
        tie_c = make_candidate(id="c", name="Carol", email="carol@example.com", skills=["Python"])
        weak = make_candidate(id="d", name="Dan", email="dan@example.com")

        outcome = rank_candidates(python_job, [tie_a, strong, tie_c, weak], max_workers=max_workers)

        assert outcome.status == "ranked"
        assert [r.candidate_id for r in outcome.results] == ["b", "a", "c", "d"]
        assert [r.rank_position for r in outcome.results] == [1, 2, 3, 4]
        assert outcome.results[1].match_score == outcome.results[2].match_score
        assert outcome.top_candidate.name == "Bob"

    def test_many_equal_candidates_keep_input_order(self, python_job, make_candidate):
        candidates = [make_candidate(id=str(i), email=f"c{i}@example.com") for i in range(25)]
        outcome = rank_candidates(python_job, candidates, max_workers=8)
        assert [r.candidate_id for r in outcome.results] == [str(i) for i in range(25)]

    def test_result_carries_candidate_contact(self, python_job, make_candidate):
        candidate = make_candidate(phone="555-0100", skills=["Python"], years_of_experience=3)
        result = rank_candidates(python_job, [candidate]).results[0]

        assert result.name == "Jane Doe"
        assert result.email == "jane.doe@example.com"
        assert result.phone == "555-0100"
        assert 0.0 <= result.match_score <= 100.0
        assert result.key_highlights == ["Key skills: Python", "3 years of experience"]
