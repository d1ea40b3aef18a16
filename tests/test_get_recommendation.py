import asyncio
import logging

import pytest

from src.domain.entities.pipeline_config import PipelineConfig
from src.domain.errors import (
    PARSE_FAILURE_MESSAGE,
    UNEXPECTED_FAILURE_MESSAGE,
    RecommendationFailedError,
)

from conftest import FakeWebSearch


def test_valid_output_returns_on_first_attempt(make_pipeline, investment_request):
    pipeline = make_pipeline(['{"advice": "buy AAPL"}'])

    result = asyncio.run(pipeline.use_case.execute(investment_request))

    assert result == {"advice": "buy AAPL"}
    assert len(pipeline.web_search.queries) == 1
    assert len(pipeline.memory_store.searches) == 1
    assert len(pipeline.llm.calls) == 1


def test_newlines_are_stripped_before_parsing(make_pipeline, investment_request):
    pipeline = make_pipeline(['{\n  "portfolio": [\n    {"symbol": "AAPL"}\n  ]\n}\n'])

    result = asyncio.run(pipeline.use_case.execute(investment_request))

    assert result == {"portfolio": [{"symbol": "AAPL"}]}


def test_recovers_on_last_attempt(make_pipeline, investment_request):
    pipeline = make_pipeline(["Sure! Here is my advice", '{"advice": "hold"}'])

    result = asyncio.run(pipeline.use_case.execute(investment_request))

    assert result == {"advice": "hold"}
    assert len(pipeline.llm.calls) == 2
    # the whole pipeline reruns, not just the parse step
    assert len(pipeline.web_search.queries) == 2
    assert len(pipeline.memory_store.searches) == 2


@pytest.mark.parametrize("max_retries", [1, 2, 4])
def test_always_malformed_fails_after_exactly_max_retries(
    make_pipeline, investment_request, max_retries
):
    pipeline = make_pipeline(["not-json"], max_retries=max_retries)

    with pytest.raises(RecommendationFailedError) as exc_info:
        asyncio.run(pipeline.use_case.execute(investment_request))

    assert exc_info.value.message == PARSE_FAILURE_MESSAGE
    assert len(pipeline.llm.calls) == max_retries
    assert len(pipeline.web_search.queries) == max_retries


def test_upstream_failure_is_retried_like_parse_failure(make_pipeline, investment_request):
    web_search = FakeWebSearch(errors=[ConnectionError("search down"), None])
    pipeline = make_pipeline(['{"advice": "sell"}'], web_search=web_search)

    result = asyncio.run(pipeline.use_case.execute(investment_request))

    assert result == {"advice": "sell"}
    assert len(web_search.queries) == 2
    assert len(pipeline.llm.calls) == 1


def test_skill_failure_is_retried(make_pipeline, investment_request):
    pipeline = make_pipeline([RuntimeError("throttled"), '{"advice": "buy"}'])

    result = asyncio.run(pipeline.use_case.execute(investment_request))

    assert result == {"advice": "buy"}
    assert len(pipeline.llm.calls) == 2


def test_upstream_failure_on_last_attempt_is_terminal(make_pipeline, investment_request):
    web_search = FakeWebSearch(errors=[ConnectionError("down"), ConnectionError("down")])
    pipeline = make_pipeline(['{"advice": "sell"}'], web_search=web_search)

    with pytest.raises(RecommendationFailedError, match=PARSE_FAILURE_MESSAGE):
        asyncio.run(pipeline.use_case.execute(investment_request))
    assert pipeline.llm.calls == []


def test_attempt_timeout_counts_as_failed_attempt(make_pipeline, investment_request):
    web_search = FakeWebSearch(delay=0.5)
    pipeline = make_pipeline(
        ['{"advice": "buy"}'], web_search=web_search, attempt_timeout_seconds=0.01
    )

    with pytest.raises(RecommendationFailedError):
        asyncio.run(pipeline.use_case.execute(investment_request))
    assert len(web_search.queries) == 2


def test_zero_attempts_is_an_unexpected_error(make_pipeline, investment_request):
    pipeline = make_pipeline(['{"advice": "buy"}'], max_retries=0)

    with pytest.raises(RecommendationFailedError) as exc_info:
        asyncio.run(pipeline.use_case.execute(investment_request))

    assert exc_info.value.message == UNEXPECTED_FAILURE_MESSAGE
    assert pipeline.llm.calls == []


def test_each_attempt_starts_from_a_fresh_context(make_pipeline, investment_request):
    web_search = FakeWebSearch(answer=["CPI-ALPHA", "CPI-BETA"])
    pipeline = make_pipeline(["oops", '{"ok": true}'], web_search=web_search)

    asyncio.run(pipeline.use_case.execute(investment_request))

    assert "CPI-ALPHA" in pipeline.llm.prompt_text(0)
    assert "CPI-BETA" in pipeline.llm.prompt_text(1)
    assert "CPI-ALPHA" not in pipeline.llm.prompt_text(1)


def test_failed_attempts_are_logged_with_attempt_number(
    make_pipeline, investment_request, caplog
):
    pipeline = make_pipeline(["not-json"])

    with caplog.at_level(logging.ERROR):
        with pytest.raises(RecommendationFailedError):
            asyncio.run(pipeline.use_case.execute(investment_request))

    messages = [r.getMessage() for r in caplog.records]
    assert "Failed to parse JSON data, retry attempt 1" in messages
    assert "Failed to parse JSON data" in messages


def test_invalid_pipeline_config_is_rejected():
    with pytest.raises(ValueError):
        PipelineConfig("")
    with pytest.raises(ValueError):
        PipelineConfig("insights", memory_relevance=1.5)
    with pytest.raises(ValueError):
        PipelineConfig("insights", memory_limit=0)
    with pytest.raises(ValueError):
        PipelineConfig("insights", max_retries=-1)


@pytest.mark.parametrize(
    "output", ['{"expectedReturn": NaN}', '{"x": Infinity}', "[-Infinity]"]
)
def test_non_standard_json_constants_fail_every_attempt(
    make_pipeline, investment_request, output
):
    pipeline = make_pipeline([output])

    with pytest.raises(RecommendationFailedError, match=PARSE_FAILURE_MESSAGE):
        asyncio.run(pipeline.use_case.execute(investment_request))
    assert len(pipeline.llm.calls) == 2


class BrokenCounter:
    def count(self, text):
        raise RuntimeError("encoding unavailable")


def test_token_counter_failure_does_not_fail_the_attempt(
    make_pipeline, investment_request, caplog
):
    pipeline = make_pipeline(['{"advice": "buy"}'], token_counter=BrokenCounter())

    with caplog.at_level(logging.WARNING):
        result = asyncio.run(pipeline.use_case.execute(investment_request))

    assert result == {"advice": "buy"}
    assert len(pipeline.llm.calls) == 1
    warnings = [r for r in caplog.records if r.getMessage() == "Token counting failed"]
    assert len(warnings) == 2
    assert warnings[0].exc_info is not None


def test_attempt_timeout_cancels_the_model_call(make_pipeline, investment_request):
    pipeline = make_pipeline(
        ['{"advice": "buy"}'], model_delay=5.0, attempt_timeout_seconds=0.2
    )

    with pytest.raises(RecommendationFailedError):
        asyncio.run(pipeline.use_case.execute(investment_request))

    assert len(pipeline.llm.calls) == 2
    assert pipeline.llm.cancelled == 2
