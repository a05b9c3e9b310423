import pytest

from extractors.resume_parser import (
    extract_experience,
    extract_resume_data,
    extract_section,
    parse_resume_text
)
from scoring.matcher import calculate_total_experience


SAMPLE_RESUME = """Jane Doe
jane.doe@example.com | 555-123-4567
123 Main Street, Springfield

Summary
Backend engineer building reliable services.

Skills
Python, Docker, Kubernetes, PostgreSQL, REST API

Experience
Acme Corp 2016 - 2020
Acme Corp
Backend Engineer
Globex 2020 - Present
Globex
Senior Engineer

Education
Bachelor of Science in Computer Science 2012 - 2016

Languages
English, Spanish
"""


@pytest.fixture
def parsed():
    return extract_resume_data(SAMPLE_RESUME)


class TestContactDetails:

    def test_name(self, parsed):
        assert parsed['name'] == "Jane Doe"

    def test_email(self, parsed):
        assert parsed['email'] == "jane.doe@example.com"

    def test_phone(self, parsed):
        assert parsed['phone'] == "555-123-4567"

    def test_address(self, parsed):
        assert parsed['address'] == "123 Main Street, Springfield"

    def test_name_requires_capitalized_first_line(self):
        assert extract_resume_data("resume of someone\nPython")['name'] is None


class TestSections:

    def test_section_stops_at_next_heading(self):
        assert extract_section(SAMPLE_RESUME, ['skills']) == (
            "Python, Docker, Kubernetes, PostgreSQL, REST API"
        )

    def test_missing_section(self):
        assert extract_section(SAMPLE_RESUME, ['awards']) is None

    def test_summary(self, parsed):
        assert parsed['summary'] == "Backend engineer building reliable services."

    def test_skills_in_vocabulary_order(self, parsed):
        assert parsed['skills'] == ['Python', 'Docker', 'Kubernetes', 'PostgreSQL', 'REST API']

    def test_skills_are_word_bounded(self):
        data = extract_resume_data("Skills\nPostgreSQL, Gopher wrangling")
        assert 'SQL' not in data['skills']
        assert 'Go' not in data['skills']

    def test_languages(self, parsed):
        assert parsed['languages'] == ['English', 'Spanish']

    def test_education(self, parsed):
        assert parsed['education'] == [{
            'degree': "Bachelor of Science in Computer Science 2012 - 2016",
            'institution': '',
            'field': '',
            'start_date': '2012',
            'end_date': '2016',
        }]

    def test_no_certifications(self, parsed):
        assert parsed['certifications'] == []


class TestExperience:

    def test_entries(self, parsed):
        assert parsed['experience'] == [
            {
                'company': 'Acme Corp',
                'position': 'Backend Engineer',
                'start_date': '2016',
                'end_date': '2020',
                'description': 'Acme Corp 2016 - 2020',
            },
            {
                'company': 'Globex',
                'position': 'Senior Engineer',
                'start_date': '2020',
                'end_date': 'Present',
                'description': 'Globex 2020 - Present',
            },
        ]

    def test_single_year_has_no_end_date(self):
        entries = extract_experience("Experience\nInternship 2019\nInitech")
        assert entries[0]['start_date'] == '2019'
        assert entries[0]['end_date'] is None

    def test_feeds_total_experience(self, parsed):
        assert calculate_total_experience(parsed['experience'], current_year=2024) == 8

    def test_no_section(self):
        assert extract_experience("Skills\nPython") == []


class TestParseResumeText:

    def test_strips_text(self):
        result = parse_resume_text("\n  " + SAMPLE_RESUME + "  \n")
        assert result['text'] == SAMPLE_RESUME.strip()
        assert result['extracted']['email'] == "jane.doe@example.com"

    @pytest.mark.parametrize("text", [None, "", "   \n\t"])
    def test_empty_text_rejected(self, text):
        with pytest.raises(ValueError, match="no text extracted"):
            parse_resume_text(text)
