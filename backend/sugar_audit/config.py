"""Application configuration."""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    # App settings
    app_name: str = "Sugar Audit API"
    debug: bool = False
    
    # CORS - Allow all origins for prototype (restrict in production)
    cors_origins: list[str] = ["*"]
    
    # Sugar verdict thresholds (g per 100g). Product heuristics, not a cited standard.
    sugar_present_threshold: float = 0.5
    polyol_present_threshold: float = 5.0  # Sugar alcohols above this count as sugar
    
    # Ingredient negation lookback, in characters
    negation_window_chars: int = 60
    
    # Nutrient values at or above this are OCR noise (secondary extractor only)
    spurious_value_ceiling: float = 10000.0
    
    # rapidfuzz ratio (0-100) for misspelled section headers
    anchor_fuzzy_threshold: float = 85.0
    
    # Batch processing
    max_batch_size: int = 200
    max_workers: int = 4
    parallel_batch_min: int = 20  # Smaller API batches run in-process
    max_label_chars: int = 20000  # Longer label text is rejected by the API
    
    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
