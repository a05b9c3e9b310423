import io
import json
import logging

import pytest

from utils.config import Config
from utils.logging_config import JSONFormatter, setup_logging


class TestConfig:

    def test_defaults(self, config):
        assert config.embedding_backend == "hashing"
        assert config.embedding_dimension == 384
        assert config.similarity_weight == 0.7
        assert config.requirements_weight == 0.3
        assert config.evidence_max_length == 200
        assert config.min_sentence_length == 10
        assert config.default_top_n == 10
        assert config.max_top_n == 50
        assert config.max_search_results == 20

    def test_yaml_file(self, tmp_path, monkeypatch):
        for var in ('EMBEDDING_BACKEND', 'DEFAULT_TOP_N', 'MAX_TOP_N'):
            monkeypatch.delenv(var, raising=False)
        path = tmp_path / "config.yaml"
        path.write_text(
            "similarity_weight: 0.5\n"
            "requirements_weight: 0.5\n"
            "max_top_n: 20\n"
            "embedding_backend: sentence-transformers\n"
        )
        config = Config(config_path=str(path))
        assert config.similarity_weight == 0.5
        assert config.requirements_weight == 0.5
        assert config.max_top_n == 20
        assert config.embedding_backend == "sentence-transformers"
        assert config.default_top_n == 10

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "config.yaml"
        path.write_text("default_top_n: 3\nlog_level: WARNING\n")
        monkeypatch.setenv('DEFAULT_TOP_N', '7')
        monkeypatch.setenv('LOG_LEVEL', 'DEBUG')
        config = Config(config_path=str(path))
        assert config.default_top_n == 7
        assert config.log_level == "DEBUG"

    def test_broken_yaml_keeps_defaults(self, tmp_path, monkeypatch, caplog):
        monkeypatch.delenv('MAX_TOP_N', raising=False)
        path = tmp_path / "config.yaml"
        path.write_text("max_top_n: [unclosed\n")
        with caplog.at_level(logging.WARNING):
            config = Config(config_path=str(path))
        assert config.max_top_n == 50
        assert "Failed to load config" in caplog.text

    @pytest.mark.parametrize("content", ["- a\n- b\n", "just a string\n", "42\n"])
    def test_non_mapping_yaml_keeps_defaults(self, tmp_path, monkeypatch, caplog, content):
        for var in ('MAX_TOP_N', 'EMBEDDING_BACKEND'):
            monkeypatch.delenv(var, raising=False)
        path = tmp_path / "config.yaml"
        path.write_text(content)
        with caplog.at_level(logging.WARNING):
            config = Config(config_path=str(path))
        assert config.max_top_n == 50
        assert config.embedding_backend == "hashing"
        assert "expected a mapping" in caplog.text

    def test_empty_yaml(self, tmp_path, monkeypatch):
        monkeypatch.delenv('MAX_TOP_N', raising=False)
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert Config(config_path=str(path)).max_top_n == 50


class TestLogging:

    def test_json_formatter(self):
        record = logging.LogRecord(
            name="scoring.ranker", level=logging.INFO, pathname=__file__, lineno=12,
            msg="Ranked %d candidates", args=(3,), exc_info=None
        )
        data = json.loads(JSONFormatter().format(record))
        assert data['level'] == "INFO"
        assert data['logger'] == "scoring.ranker"
        assert data['message'] == "Ranked 3 candidates"
        assert data['line'] == 12
        assert 'timestamp' in data

    def test_setup_logging_writes_json_lines(self):
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        stream = io.StringIO()
        try:
            setup_logging("debug", stream=stream)
            assert root.level == logging.DEBUG
            logging.getLogger("scoring").debug("hello")
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)

        assert json.loads(stream.getvalue().splitlines()[-1])['message'] == "hello"

    def test_unknown_level_falls_back_to_info(self):
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            setup_logging("chatty", stream=io.StringIO())
            assert root.level == logging.INFO
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)
