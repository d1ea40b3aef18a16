"""
Process configuration read from environment variables.

The composition roots call load_dotenv() first, then Settings.from_env().
Only PipelineConfig crosses into the application layer; everything else is
consumed by infrastructure adapters.
"""

import os
from dataclasses import dataclass

from src.domain.entities.pipeline_config import PipelineConfig


def _optional_float(name: str) -> float | None:
    value = os.environ.get(name, "").strip()
    return float(value) if value else None


@dataclass(frozen=True)
class Settings:
    memory_collection: str
    tavily_api_key: str
    memory_store_path: str = "memorystore"
    memory_relevance: float = 0.8
    memory_limit: int = 3
    max_retries: int = 2
    attempt_timeout_seconds: float | None = None
    web_search_timeout_seconds: float = 10.0
    web_search_max_results: int = 3
    bedrock_model_id: str = "us.amazon.nova-pro-v1:0"
    aws_region: str = "us-east-1"
    user_profiles_path: str | None = None
    token_encoding: str = "cl100k_base"
    log_level: str = "INFO"
    langfuse_enabled: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from os.environ.

        Raises:
            KeyError:   if MEMORY_COLLECTION or TAVILY_API_KEY is missing.
            ValueError: if a numeric variable cannot be parsed.
        """
        env = os.environ
        return cls(
            memory_collection=env["MEMORY_COLLECTION"],
            tavily_api_key=env["TAVILY_API_KEY"],
            memory_store_path=env.get("MEMORY_STORE_PATH", "memorystore"),
            memory_relevance=float(env.get("MEMORY_RELEVANCE", "0.8")),
            memory_limit=int(env.get("MEMORY_LIMIT", "3")),
            max_retries=int(env.get("MAX_RETRIES", "2")),
            attempt_timeout_seconds=_optional_float("ATTEMPT_TIMEOUT_SECONDS"),
            web_search_timeout_seconds=float(env.get("WEB_SEARCH_TIMEOUT_SECONDS", "10")),
            web_search_max_results=int(env.get("WEB_SEARCH_MAX_RESULTS", "3")),
            bedrock_model_id=env.get("BEDROCK_MODEL_ID", "us.amazon.nova-pro-v1:0"),
            aws_region=env.get("AWS_DEFAULT_REGION", "us-east-1"),
            user_profiles_path=env.get("USER_PROFILES_PATH") or None,
            token_encoding=env.get("TOKEN_ENCODING", "cl100k_base"),
            log_level=env.get("LOG_LEVEL", "INFO"),
            langfuse_enabled=bool(
                env.get("LANGFUSE_PUBLIC_KEY") and env.get("LANGFUSE_SECRET_KEY")
            ),
        )

    def pipeline_config(self) -> PipelineConfig:
        return PipelineConfig(
            memory_collection=self.memory_collection,
            memory_relevance=self.memory_relevance,
            memory_limit=self.memory_limit,
            max_retries=self.max_retries,
            attempt_timeout_seconds=self.attempt_timeout_seconds,
        )
