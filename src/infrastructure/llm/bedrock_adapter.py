"""
Infrastructure adapter: Amazon Bedrock (ChatBedrock) -> ILanguageModel.
All ChatBedrock / langchain_aws details are confined here.
"""

from typing import Any

from langchain_aws import ChatBedrock

from src.domain.ports.llm_port import ILanguageModel


class BedrockChatAdapter(ILanguageModel):
    """Wraps ChatBedrock and exposes the ILanguageModel interface."""

    MODEL_ID = "us.amazon.nova-pro-v1:0"

    def __init__(
        self,
        model_id: str | None = None,
        region: str = "us-east-1",
        temperature: float = 0.0,
    ) -> None:
        self._llm = ChatBedrock(
            model=model_id or self.MODEL_ID,
            model_kwargs={"temperature": temperature},
            region_name=region,
        )

    async def ainvoke(self, messages: list[Any], config: dict | None = None) -> Any:
        return await self._llm.ainvoke(messages, config=config)
