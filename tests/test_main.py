from unittest.mock import MagicMock

from cvmatch import main


class TestPublicEntryPoints:
    """Exercise the whole pipeline through the public facade"""

    def test_upload_to_analysis(self, sample_cv, backend_job):
        service = main.CandidateService(main.InMemoryCandidateStore())
        text = main.extract_document_text(sample_cv.encode("utf-8"), "jane.txt")

        jane = service.process_cv(text, "jane.txt", "Jane Doe", "jane.doe@example.com")
        bob = service.process_cv("Bob\nSkills: Rust", "bob.txt", "Bob Ray", "bob.ray@example.com")

        generator = MagicMock()
        generator.generate.side_effect = RuntimeError("offline")
        analysis = main.analyze_job(backend_job, service.get_all_candidates(), generator=generator)

        assert [r.candidate_id for r in analysis.ranked_candidates] == [jane.id, bob.id]
        assert analysis.top_candidate_recommendation.startswith("Jane Doe is the top candidate with a 100.0%")

    def test_extraction_functions(self, sample_cv):
        text = main.sanitize_text(sample_cv)

        assert main.extract_years_of_experience(text) == 5
        assert main.extract_experience(text) == "building services."
        assert "Java" in main.extract_skills(text)
