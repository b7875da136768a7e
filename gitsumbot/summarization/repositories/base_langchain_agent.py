"""Base class for LangChain-based LLM agents."""

from abc import ABC
from collections.abc import Sequence
from typing import TYPE_CHECKING

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from gitsumbot.summarization.domain.value_objects import ModelVersion
from gitsumbot.summarization.repositories.interfaces import LLMAgentRepository

if TYPE_CHECKING:
    from langchain_core.language_models.chat_models import BaseChatModel

SUMMARY_TEMPERATURE = 0.4
CATEGORIZE_TEMPERATURE = 0.1

CATEGORIES = ("build", "ci", "docs", "feat", "fix", "perf", "refactor", "revert", "style", "test")
CATEGORY_LIST = ", ".join(CATEGORIES)

SUMMARY_SYSTEM_PROMPT = """You are an expert software engineer writing a daily \
digest of the code changes added to a codebase, using the commit messages given \
by the user.

Start your answer with the sentence: \
'Based on the provided commit messages, here's the summary of changes:'
Follow it with a detailed summary of all the changes in a few sentences.

Rules:
- Write a continuous narrative, never a bulleted or numbered list
- Group related changes together by type (features, fixes, refactoring, \
documentation, tooling) where it reads naturally
- Mention every meaningful change, skip merge noise
- Do not invent changes that are not in the commit messages
- Do not prompt for further questions or comments."""

SUMMARY_EXAMPLE_MESSAGES = (
    "feat(api): add pagination to the /orders endpoint",
    "fix: handle empty cart when computing shipping costs",
    "docs: document the new ORDERS_PAGE_SIZE setting",
    "chore(deps): bump requests from 2.31.0 to 2.32.0",
    "fix(api): return 404 instead of 500 for unknown order ids",
)

SUMMARY_EXAMPLE_OUTPUT = """Based on the provided commit messages, here's the \
summary of changes: the orders API gained pagination on the /orders endpoint, \
with the new ORDERS_PAGE_SIZE setting documented alongside it. Two fixes \
landed as well: shipping costs are now computed correctly for an empty cart, \
and unknown order ids return a 404 instead of a server error. Finally, the \
requests dependency was bumped to 2.32.0."""

CATEGORIZE_SYSTEM_PROMPT = f"""You are an expert software engineer organizing \
the commit messages given by the user.

Group related commit messages into categories and present them as a markdown \
listing: one heading line per category followed by one bullet per change.

Rules:
- Use these categories when they apply: {CATEGORY_LIST}
- Put a change in exactly one category
- Rephrase each change as a short sentence, keep scopes and identifiers
- Omit empty categories
- Do not prompt for further questions or comments."""


def format_commit_messages(messages: Sequence[str]) -> str:
    """Format commit messages as the final human turn of a prompt."""
    return "Here are the commit messages:\n\n" + "\n\n".join(messages)


class BaseLangChainAgent(LLMAgentRepository, ABC):
    """Base class for LangChain-based digest agents.

    Subclasses set ``_summary_llm`` and ``_categorize_llm``: the same model
    configured with the temperature of each artifact.
    """

    def __init__(self, model_version: ModelVersion) -> None:
        """Initialize the base agent with common configuration.

        Args:
            model_version: Model both artifacts are generated with
        """
        self._model_version = model_version
        self._summary_llm: BaseChatModel  # Set by subclasses
        self._categorize_llm: BaseChatModel  # Set by subclasses

    @property
    def model_version(self) -> ModelVersion:
        return self._model_version

    async def summarize(self, messages: Sequence[str]) -> str:
        """
        Generate a prose summary of a set of commit messages.

        Args:
            messages: Commit messages, newest first

        Returns:
            A narrative paragraph describing the changes

        Raises:
            RuntimeError: If the LLM API call fails or returns nothing
        """
        return await self._complete(self._summary_llm, self.build_summary_prompt(messages))

    async def categorize(self, messages: Sequence[str]) -> str:
        """
        Group related commit messages into categories.

        Args:
            messages: Commit messages, newest first

        Returns:
            A markdown listing of the messages grouped by category

        Raises:
            RuntimeError: If the LLM API call fails or returns nothing
        """
        return await self._complete(
            self._categorize_llm, self.build_categorize_prompt(messages)
        )

    @staticmethod
    def build_summary_prompt(messages: Sequence[str]) -> list[BaseMessage]:
        """Build the summary conversation: instruction, one-shot example, real input."""
        return [
            SystemMessage(content=SUMMARY_SYSTEM_PROMPT),
            HumanMessage(content=format_commit_messages(SUMMARY_EXAMPLE_MESSAGES)),
            AIMessage(content=SUMMARY_EXAMPLE_OUTPUT),
            HumanMessage(content=format_commit_messages(messages)),
        ]

    @staticmethod
    def build_categorize_prompt(messages: Sequence[str]) -> list[BaseMessage]:
        """Build the categorization conversation."""
        return [
            SystemMessage(content=CATEGORIZE_SYSTEM_PROMPT),
            HumanMessage(content=format_commit_messages(messages)),
        ]

    async def _complete(self, llm: "BaseChatModel", prompt: list[BaseMessage]) -> str:
        """Send a conversation to the model and return the text of its answer."""
        try:
            response = await llm.ainvoke(prompt)
        except Exception as e:
            raise RuntimeError(f"LLM API call failed: {str(e)}") from e

        text = self._extract_text(response.content).strip()
        if not text:
            raise RuntimeError(
                f"Model {self._model_version.value} returned an empty completion"
            )
        return text

    @staticmethod
    def _extract_text(content: object) -> str:
        """Flatten a chat model response content into plain text."""
        if isinstance(content, str):
            return content
        elif isinstance(content, list):
            # If content is a list, extract text from it
            return " ".join(
                str(item) if isinstance(item, str) else str(item.get("text", ""))
                for item in content
            )
        else:
            # Fallback: convert any other type to string
            return str(content)
