"""
Configuration management module.
"""
import os
import yaml
import logging

logger = logging.getLogger(__name__)


class Config:
    """Matching engine configuration."""

    def __init__(self, config_path: str = "config.yaml"):
        """
        Initialize configuration from YAML file or defaults.

        Args:
            config_path: Path to config YAML file
        """
        # Default configuration
        self.embedding_backend = "hashing"
        self.embedding_model = "sentence-transformers/all-MiniLM-L6-v2"
        self.embedding_dimension = 384
        self.embedding_batch_size = 16

        # Ranking weights (should sum to 1.0)
        self.similarity_weight = 0.7
        self.requirements_weight = 0.3

        self.evidence_max_length = 200
        self.min_sentence_length = 10
        self.default_top_n = 10
        self.max_top_n = 50
        self.default_search_results = 5
        self.max_search_results = 20
        self.log_level = "INFO"

        # Load from file if exists
        if os.path.exists(config_path):
            try:
                with open(config_path, 'r') as f:
                    config_data = yaml.safe_load(f)
                    self._load_from_dict(config_data)
                    logger.info(f"Configuration loaded from {config_path}")
            except (OSError, yaml.YAMLError) as e:
                logger.warning(f"Failed to load config from {config_path}: {str(e)}")
        else:
            logger.info("Using default configuration")

        # Override with environment variables
        self._load_from_env()

    def _load_from_dict(self, config_data: dict) -> None:
        """Load configuration from dictionary."""
        if not config_data:
            return

        if not isinstance(config_data, dict):
            logger.warning(
                f"Ignoring config file: expected a mapping, got {type(config_data).__name__}"
            )
            return

        self.embedding_backend = config_data.get('embedding_backend', self.embedding_backend)
        self.embedding_model = config_data.get('embedding_model', self.embedding_model)
        self.embedding_dimension = config_data.get('embedding_dimension', self.embedding_dimension)
        self.embedding_batch_size = config_data.get('embedding_batch_size', self.embedding_batch_size)
        self.similarity_weight = config_data.get('similarity_weight', self.similarity_weight)
        self.requirements_weight = config_data.get('requirements_weight', self.requirements_weight)
        self.evidence_max_length = config_data.get('evidence_max_length', self.evidence_max_length)
        self.min_sentence_length = config_data.get('min_sentence_length', self.min_sentence_length)
        self.default_top_n = config_data.get('default_top_n', self.default_top_n)
        self.max_top_n = config_data.get('max_top_n', self.max_top_n)
        self.default_search_results = config_data.get('default_search_results', self.default_search_results)
        self.max_search_results = config_data.get('max_search_results', self.max_search_results)
        self.log_level = config_data.get('log_level', self.log_level)

    def _load_from_env(self) -> None:
        """Load configuration from environment variables."""
        if os.getenv('EMBEDDING_BACKEND'):
            self.embedding_backend = os.getenv('EMBEDDING_BACKEND')

        if os.getenv('EMBEDDING_MODEL'):
            self.embedding_model = os.getenv('EMBEDDING_MODEL')

        if os.getenv('DEFAULT_TOP_N'):
            self.default_top_n = int(os.getenv('DEFAULT_TOP_N'))

        if os.getenv('MAX_TOP_N'):
            self.max_top_n = int(os.getenv('MAX_TOP_N'))

        if os.getenv('LOG_LEVEL'):
            self.log_level = os.getenv('LOG_LEVEL')
