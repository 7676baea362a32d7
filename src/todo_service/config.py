"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    environment: str = "development"
    debug: bool = False
    service_name: str = "ai-todo-service"

    # Local calendar used for "today", anchors and period windows
    timezone: str = "Asia/Seoul"

    # AWS
    aws_region: str = "us-east-1"

    # CORS
    cors_origins: list[str] = ["*"]

    # Bedrock - Claude Haiku 4.5 with cross-region inference
    bedrock_model_id: str = "us.anthropic.claude-haiku-4-5-20251001-v1:0"
    generation_timeout_seconds: float = 30.0
    extraction_max_tokens: int = 1000
    analysis_max_tokens: int = 2000
    analysis_temperature: float = 0.8

    # Language the narrative analysis is written in
    response_language: str = "Korean"

    class Config:
        env_prefix = "TODO_"
        case_sensitive = False


settings = Settings()
