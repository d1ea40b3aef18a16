"""
FastAPI entry point.

This module is the Composition Root: it loads configuration, wires all
infrastructure adapters and passes them to the application layer.

Run locally:
    uvicorn src.infrastructure.entrypoints.fastapi_app:app --reload --port 8000
"""

from dotenv import load_dotenv

load_dotenv()

from src.application.agent.graph import build_skill_chain_graph  # noqa: E402
from src.application.agent.skills import create_skills  # noqa: E402
from src.application.use_cases.augment_context import RetrievalAugmenter  # noqa: E402
from src.application.use_cases.get_recommendation import (  # noqa: E402
    GetInvestmentRecommendationUseCase,
)
from src.application.use_cases.run_skill_chain import SkillChainExecutor  # noqa: E402
from src.infrastructure.config.settings import Settings  # noqa: E402
from src.infrastructure.entrypoints.http_api import create_app  # noqa: E402
from src.infrastructure.llm.bedrock_adapter import BedrockChatAdapter  # noqa: E402
from src.infrastructure.memory.faiss_memory_store import FAISSMemoryStore  # noqa: E402
from src.infrastructure.observability.langfuse_adapter import (  # noqa: E402
    LangfuseObservabilityHandler,
    NoopObservabilityHandler,
)
from src.infrastructure.observability.logging_config import configure_logging  # noqa: E402
from src.infrastructure.tokens.tiktoken_counter import TiktokenCounter  # noqa: E402
from src.infrastructure.user_profile.in_memory_profile_provider import (  # noqa: E402
    InMemoryUserProfileProvider,
)
from src.infrastructure.web_search.tavily_adapter import TavilyWebSearchEngine  # noqa: E402

# ---------------------------------------------------------------------------
# Composition Root: wire all dependencies once at startup
# ---------------------------------------------------------------------------
_settings = Settings.from_env()
configure_logging(_settings.log_level)

_web_search = TavilyWebSearchEngine(
    api_key=_settings.tavily_api_key,
    timeout_seconds=_settings.web_search_timeout_seconds,
    max_results=_settings.web_search_max_results,
)
_memory_store = FAISSMemoryStore(_settings.memory_store_path, region=_settings.aws_region)
_llm = BedrockChatAdapter(model_id=_settings.bedrock_model_id, region=_settings.aws_region)
_profiles = (
    InMemoryUserProfileProvider.from_json_file(_settings.user_profiles_path)
    if _settings.user_profiles_path
    else InMemoryUserProfileProvider()
)
_observability = (
    LangfuseObservabilityHandler()
    if _settings.langfuse_enabled
    else NoopObservabilityHandler()
)

_graph = build_skill_chain_graph(create_skills(_llm, _profiles))
_use_case = GetInvestmentRecommendationUseCase(
    config=_settings.pipeline_config(),
    augmenter=RetrievalAugmenter(_web_search, _memory_store),
    skill_chain=SkillChainExecutor(
        _graph, _observability, TiktokenCounter(_settings.token_encoding)
    ),
)

app = create_app(_use_case, on_shutdown=_observability.flush)
