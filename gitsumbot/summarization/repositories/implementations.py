"""Concrete implementations of LLM digest generation using LangChain."""

from langchain_anthropic import ChatAnthropic
from langchain_openai import ChatOpenAI

from gitsumbot.summarization.domain.value_objects import LLMProvider, ModelVersion
from gitsumbot.summarization.repositories.base_langchain_agent import (
    CATEGORIZE_TEMPERATURE,
    SUMMARY_TEMPERATURE,
    BaseLangChainAgent,
)

ANTHROPIC_MAX_TOKENS = 1024


def _require_key(api_key: str, variable: str) -> None:
    if not api_key:
        raise ValueError(
            f"{variable} is required. "
            "Please set it in a .env file or as an environment variable."
        )


class LangChainOpenAIAgent(BaseLangChainAgent):
    """LangChain implementation using OpenAI chat completions."""

    def __init__(self, api_key: str, model_version: ModelVersion) -> None:
        """
        Initialize the OpenAI agent.

        Args:
            api_key: OpenAI API key
            model_version: An OpenAI model from the allow-list

        Raises:
            ValueError: If the key is empty or the model is not an OpenAI model
        """
        _require_key(api_key, "OPENAI_API_KEY")
        if model_version.provider is not LLMProvider.OPENAI:
            raise ValueError(f"{model_version.value} is not an OpenAI model")

        super().__init__(model_version)
        self._summary_llm = self._build_llm(api_key, SUMMARY_TEMPERATURE)
        self._categorize_llm = self._build_llm(api_key, CATEGORIZE_TEMPERATURE)

    def _build_llm(self, api_key: str, temperature: float) -> ChatOpenAI:
        return ChatOpenAI(  # type: ignore[call-arg]
            model=self._model_version.value,
            api_key=api_key,
            temperature=temperature,
            top_p=1,
            frequency_penalty=0,
            presence_penalty=0,
        )


class LangChainClaudeAgent(BaseLangChainAgent):
    """LangChain implementation using Claude."""

    def __init__(self, api_key: str, model_version: ModelVersion) -> None:
        """
        Initialize the Claude agent.

        Args:
            api_key: Anthropic API key
            model_version: A Claude model from the allow-list

        Raises:
            ValueError: If the key is empty or the model is not a Claude model
        """
        _require_key(api_key, "ANTHROPIC_API_KEY")
        if model_version.provider is not LLMProvider.ANTHROPIC:
            raise ValueError(f"{model_version.value} is not a Claude model")

        super().__init__(model_version)
        self._summary_llm = self._build_llm(api_key, SUMMARY_TEMPERATURE)
        self._categorize_llm = self._build_llm(api_key, CATEGORIZE_TEMPERATURE)

    def _build_llm(self, api_key: str, temperature: float) -> ChatAnthropic:
        # Anthropic has no frequency/presence penalties; top_p stays at its default
        return ChatAnthropic(  # type: ignore[call-arg]
            model_name=self._model_version.value,
            api_key=api_key,
            temperature=temperature,
            max_tokens=ANTHROPIC_MAX_TOKENS,
        )
