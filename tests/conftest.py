import pytest

from app import ResumeMatchingApp
from utils.config import Config


STRONG_RESUME = """John Smith
john.smith@example.com | 555-987-6543

Summary
Backend developer focused on Python services and container platforms.

Skills
Python, Docker, Kubernetes, AWS

Experience
Initech 2015 - 2020
Initech
Python Developer
"""

WEAK_RESUME = """Mary Major

Summary
Pastry chef creating seasonal desserts for busy restaurants.

Skills
Baking, Plating, Menu design
"""

JOB_DESCRIPTION = "Senior Python developer with 3+ years experience with Docker and AWS."


@pytest.fixture
def config(tmp_path, monkeypatch):
    for var in ('EMBEDDING_BACKEND', 'EMBEDDING_MODEL', 'DEFAULT_TOP_N', 'MAX_TOP_N', 'LOG_LEVEL'):
        monkeypatch.delenv(var, raising=False)
    return Config(config_path=str(tmp_path / "missing.yaml"))


@pytest.fixture
def matching_app(config):
    return ResumeMatchingApp(config)


@pytest.fixture
def make_resume():
    """Factory for processed resume records."""
    def _make(resume_id="r1", text="", skills=None, experience=None, embedding=None, status="processed"):
        return {
            'id': resume_id,
            'status': status,
            'parsed_content': text,
            'extracted_data': {
                'name': 'Test Candidate',
                'skills': skills or [],
                'experience': experience or []
            },
            'embedding': embedding if embedding is not None else [],
        }
    return _make
