"""Factory for creating LLM agent instances."""

from gitsumbot.summarization.domain.value_objects import LLMProvider, ModelVersion
from gitsumbot.summarization.repositories.implementations import (
    LangChainClaudeAgent,
    LangChainOpenAIAgent,
)
from gitsumbot.summarization.repositories.interfaces import LLMAgentRepository


def create_llm_agent(api_key: str, model_version: ModelVersion) -> LLMAgentRepository:
    """
    Create an LLM agent for the provider serving the model.

    Args:
        api_key: API key of the model's provider
        model_version: Model to generate digests with

    Returns:
        LLM agent instance (Claude or OpenAI)

    Raises:
        ValueError: If the API key is missing
    """
    match model_version.provider:
        case LLMProvider.ANTHROPIC:
            return LangChainClaudeAgent(api_key=api_key, model_version=model_version)
        case LLMProvider.OPENAI:
            return LangChainOpenAIAgent(api_key=api_key, model_version=model_version)
