import pytest

from utils.validators import (
    RESUME_STATUS_FAILED,
    RESUME_STATUS_PROCESSING,
    is_rankable,
    select_rankable_resumes,
    validate_search_request,
    validate_top_n
)


class TestValidateTopN:

    @pytest.mark.parametrize("top_n", [1, 10, 50])
    def test_valid(self, config, top_n):
        assert validate_top_n(top_n, config) == (True, "")

    @pytest.mark.parametrize("top_n", [0, -3, 51])
    def test_out_of_range(self, config, top_n):
        assert validate_top_n(top_n, config) == (False, "top_n must be between 1 and 50")

    @pytest.mark.parametrize("top_n", ["10", 2.5, None, True])
    def test_not_an_integer(self, config, top_n):
        assert validate_top_n(top_n, config) == (False, "top_n must be an integer")

    def test_limit_from_config(self, config):
        config.max_top_n = 5
        is_valid, error = validate_top_n(6, config)
        assert not is_valid
        assert error == "top_n must be between 1 and 5"


class TestValidateSearchRequest:

    def test_valid(self, config):
        assert validate_search_request("python", 5, config) == (True, "")

    @pytest.mark.parametrize("query", [None, "", " a ", 42])
    def test_bad_query(self, config, query):
        assert validate_search_request(query, 5, config) == (False, "Query must be provided")

    @pytest.mark.parametrize("k", [0, 21])
    def test_bad_k(self, config, k):
        assert validate_search_request("python", k, config) == (False, "k must be 1-20")

    def test_k_not_an_integer(self, config):
        assert validate_search_request("python", "5", config) == (False, "k must be an integer")


class TestRankableResumes:

    def test_selects_processed_with_text_and_embedding(self, make_resume):
        ready = make_resume('ready', text="Python developer", embedding=[0.1, 0.2])
        resumes = [
            ready,
            make_resume('processing', text="x", embedding=[0.1], status=RESUME_STATUS_PROCESSING),
            make_resume('failed', text="x", embedding=[0.1], status=RESUME_STATUS_FAILED),
            make_resume('no-text', embedding=[0.1]),
            make_resume('no-embedding', text="Python developer"),
        ]
        assert select_rankable_resumes(resumes) == [ready]

    def test_missing_embedding_key(self):
        assert not is_rankable({'status': 'processed', 'parsed_content': 'text'})
