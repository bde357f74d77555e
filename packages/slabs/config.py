# slabs/config.py

from pydantic_settings import BaseSettings, SettingsConfigDict


class ChunkingSettings(BaseSettings):
    """
    Process-wide defaults for the chunking engine.
    Values are read from SLABS_* environment variables or a local .env file.
    """

    # Size budget defaults (characters)
    DEFAULT_TARGET_SIZE: int = 2048
    DEFAULT_OVERLAP: int = 0

    # Semantic strategy
    DEFAULT_SIMILARITY_THRESHOLD: float = 0.5
    EMBED_BATCH_SIZE: int = 0  # 0 sends every sentence of a document in one batch
    USE_MOCK_EMBEDDINGS: bool = False
    MOCK_EMBEDDING_DIM: int = 384

    # Safety checks
    VALIDATE_SLABS: bool = False  # Re-check the span contract on every result
    MAX_DOCUMENT_CHARS: int = 50_000_000

    model_config = SettingsConfigDict(
        env_prefix="SLABS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Instantiate settings once and export
settings = ChunkingSettings()

__all__ = ["ChunkingSettings", "settings"]
