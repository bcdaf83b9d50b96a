"""
A-Eye Edge Configuration
"""

import logging
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="AEYE_",
        env_file=".env",
        extra="ignore",
        protected_namespaces=(),
    )

    # Model asset
    model_file_name: str = "16AEYEMODEL.ptl"
    asset_dir: Path = Path("./assets")  # read-only bundle
    files_dir: Path = Path("./data/files")  # writable per-app storage

    # Boundary
    channel_name: str = "com.example.a_eye/pytorch"

    # Server
    host: str = "127.0.0.1"
    port: int = 8080

    # Runtime
    num_threads: int = 0  # 0 keeps the torch default

    # Logging
    log_level: str = "INFO"
    log_dir: Path = Path("./data/logs")


settings = Settings()


def get_settings() -> Settings:
    return settings


def setup_logging(config: Settings = None):
    """Configure logging"""
    config = config or settings
    log_dir = Path(config.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format='%(asctime)s | %(name)s | %(levelname)s | %(message)s',
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler(log_dir / 'aeye-edge.log')
        ]
    )
