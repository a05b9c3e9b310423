import pytest

from utils.sanitizers import REDACTED, sanitize_filename, to_safe_dict


@pytest.fixture
def resume():
    return {
        'id': 'r1',
        'status': 'processed',
        'parsed_content': "Jane Doe, backend engineer",
        'embedding': [0.1, 0.2],
        'extracted_data': {
            'name': 'Jane Doe',
            'email': 'jane@example.com',
            'phone': '',
            'address': None,
            'skills': ['Python'],
            'experience': [
                {'company': 'Acme', 'start_date': '2016', 'description': 'Acme 2016 - 2020'},
                {'company': 'Globex', 'start_date': '2020', 'description': ''},
            ],
        },
    }


class TestSanitizeFilename:

    @pytest.mark.parametrize("filename, expected", [
        ("resume.txt", "resume.txt"),
        ("../../etc/passwd", "passwd"),
        ("my <cv>;.txt", "my cv.txt"),
        ("..hidden.txt. ", "hidden.txt"),
        ("", "unnamed_resume.txt"),
        (None, "unnamed_resume.txt"),
        ("$$$", "unnamed_resume.txt"),
    ])
    def test_sanitize(self, filename, expected):
        assert sanitize_filename(filename) == expected

    def test_long_names_keep_extension(self):
        result = sanitize_filename("a" * 150 + ".txt")
        assert result == "a" * 90 + ".txt"


class TestToSafeDict:

    def test_recruiter_sees_everything_but_embedding(self, resume):
        safe = to_safe_dict(resume, is_recruiter=True)
        assert 'embedding' not in safe
        assert safe['extracted_data'] == resume['extracted_data']

    def test_redacts_pii(self, resume):
        extracted = to_safe_dict(resume)['extracted_data']
        assert extracted['name'] == REDACTED
        assert extracted['email'] == REDACTED
        assert extracted['phone'] == ''
        assert extracted['address'] is None
        assert extracted['skills'] == ['Python']

    def test_redacts_experience_descriptions(self, resume):
        experience = to_safe_dict(resume)['extracted_data']['experience']
        assert experience[0] == {'company': 'Acme', 'start_date': '2016', 'description': REDACTED}
        assert experience[1]['description'] == ''

    def test_input_not_modified(self, resume):
        to_safe_dict(resume)
        assert resume['embedding'] == [0.1, 0.2]
        assert resume['extracted_data']['name'] == 'Jane Doe'

    def test_without_extracted_data(self):
        assert to_safe_dict({'id': 'x', 'embedding': [1.0]}) == {'id': 'x'}
