"""
Configuration management using Pydantic Settings
"""
from pathlib import Path
from typing import List, Optional

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Application settings
    app_name: str = "NLP Server"
    version: str = "1.0.0"
    debug: bool = False

    # Server settings
    host: str = "0.0.0.0"
    port: int = 3000
    enable_cors: bool = False
    cors_origins: List[str] = ["*"]

    # Language detection
    language_detector_model: Optional[Path] = None
    cjk_tokenizer_model: Optional[Path] = None
    frequency_dictionary: Optional[Path] = None

    # Per-language models (one file per language)
    tokenizer_models_dir: Optional[Path] = None
    parser_models_dir: Optional[Path] = None
    morphology_dictionaries_dir: Optional[Path] = None
    word_embeddings_dir: Optional[Path] = None

    # Per-domain models (one file per domain)
    classifier_models_dir: Optional[Path] = None
    classifier_embeddings_dir: Optional[Path] = None
    frame_extractor_models_dir: Optional[Path] = None
    frame_extractor_embeddings_dir: Optional[Path] = None
    labeler_models_dir: Optional[Path] = None

    # Locations
    locations_dictionary: Optional[Path] = None
    locations_labeler_domain: Optional[str] = None

    # Summarization
    summarizer_model: Optional[Path] = None
    lemmas_blacklist_dir: Optional[Path] = None

    # Separator between prefix and key in model filenames, e.g. 'tokenizer__en.bin'
    key_delimiter: str = "__"

    # Text comparison
    compare_workers: int = 4
    compare_chunk_size: int = 50

    # Logging settings
    log_level: str = "INFO"
    log_to_file: bool = True
    log_dir: str = "logs"
    log_file_max_bytes: int = 10485760
    log_file_backup_count: int = 10

    # Monitoring
    enable_metrics: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @model_validator(mode="after")
    def validate_settings(self) -> "Settings":
        """Validate critical settings on startup"""
        errors = []

        # Arguments that require other arguments
        dependencies = [
            ("cjk_tokenizer_model", "language_detector_model"),
            ("language_detector_model", "cjk_tokenizer_model"),
            ("frequency_dictionary", "language_detector_model"),
            ("classifier_embeddings_dir", "classifier_models_dir"),
            ("frame_extractor_embeddings_dir", "frame_extractor_models_dir"),
            ("locations_labeler_domain", "labeler_models_dir"),
            ("lemmas_blacklist_dir", "summarizer_model"),
        ]
        for name, required in dependencies:
            if getattr(self, name) is not None and getattr(self, required) is None:
                errors.append(f"'{name}' requires '{required}'")

        if self.compare_workers < 1:
            errors.append("compare_workers must be at least 1")
        if self.compare_chunk_size < 1:
            errors.append("compare_chunk_size must be at least 1")
        if not self.key_delimiter:
            errors.append("key_delimiter cannot be empty")
        if self.log_level.upper() not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            errors.append(f"Invalid log level: {self.log_level}")

        if errors:
            raise ValueError(f"Configuration errors: {'; '.join(errors)}")

        return self


settings = Settings()
