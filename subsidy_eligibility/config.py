"""Configuration management using Pydantic BaseSettings."""
from pathlib import Path
from typing import Union

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable overrides."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Logging
    log_dir: Path = Field(default_factory=lambda: Path("./logs"), alias="LOG_DIR")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Report output
    out_dir: Path = Field(default_factory=lambda: Path("./out"), alias="OUT_DIR")
    report_indent: int = Field(default=2, alias="REPORT_INDENT")

    def resolve_output(self, output_path: Union[str, Path]) -> Path:
        """Place relative report paths under out_dir; absolute paths are kept."""
        output_path = Path(output_path)
        if output_path.is_absolute():
            return output_path
        return self.out_dir / output_path

    @property
    def log_file(self) -> Path:
        """Return the CLI job's log file path."""
        return self.log_dir / "evaluate_customer.log"


# Global settings instance
settings = Settings()
