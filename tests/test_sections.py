import pytest

from cvmatch.models.settings import ExtractionSettings
from cvmatch.services.sections import (
    EDUCATION_NOT_FOUND,
    EXPERIENCE_NOT_FOUND,
    extract_education,
    extract_experience,
    extract_years_of_experience,
)


class TestExtractExperience:
    """Test cases for experience section extraction"""

    def test_section_between_headers(self):
        text = "John Smith\nExperience\nSenior developer at Acme\nEducation\nBSc Physics"
        assert extract_experience(text) == "Senior developer at Acme"

    def test_runs_to_end_without_next_header(self):
        text = "Work history\nTeam lead at Initech"
        assert extract_experience(text) == "Team lead at Initech"

    def test_truncated_to_section_limit(self):
        text = "Experience\n" + "x" * 50
        assert extract_experience(text, ExtractionSettings(section_max_chars=10)) == "x" * 10

    def test_not_found(self):
        assert extract_experience("Just a name and a phone number") == EXPERIENCE_NOT_FOUND


class TestExtractEducation:
    """Test cases for the three education strategies"""

    def test_header_strategy(self, sample_cv):
        assert extract_education(sample_cv) == "Bachelor of Science in Computer Science"

    def test_header_stops_at_next_section(self):
        text = "Education\nMaster of Engineering, Delft\nSkills\nPython"
        assert extract_education(text) == "Master of Engineering, Delft"

    def test_degree_strategy(self):
        assert extract_education("Holds a Bachelor of Arts in History") == "Bachelor of Arts in History"

    def test_institution_strategy(self):
        result = extract_education("Graduated from Trinity College")
        assert "Trinity College" in result

    def test_not_found(self):
        assert extract_education("Hello world") == EDUCATION_NOT_FOUND

    def test_empty(self):
        assert extract_education("") == EDUCATION_NOT_FOUND


class TestExtractYearsOfExperience:
    @pytest.mark.parametrize("text,expected", [
        ("Over 7+ years of experience in Java", 7),
        ("5 years experience", 5),
        ("10 Years of work in retail", 10),
        ("1 year experience, later 9 years of experience", 1),
    ])
    def test_first_match(self, text, expected):
        assert extract_years_of_experience(text) == expected

    @pytest.mark.parametrize("text", ["", None, "experienced engineer", "5 yrs in Java"])
    def test_absent(self, text):
        assert extract_years_of_experience(text) is None
