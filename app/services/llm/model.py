"""LLM model abstraction for consistent model access across the application."""

from pydantic_ai.models.openai import OpenAIResponsesModel
from pydantic_ai.providers.openai import OpenAIProvider


def get_model(provider: str, model_name: str, api_key: str):
    """Build a model handle for the given provider.

    The Responses API model is used so the web-search builtin tool is
    available to the citation fallback.
    """
    if provider == "openai":
        if not api_key:
            raise ValueError("OPENAI_API_KEY is not set. Please configure it in your .env file or environment variables.")
        return OpenAIResponsesModel(model_name, provider=OpenAIProvider(api_key=api_key))

    raise ValueError(f"Unsupported LLM provider: {provider}")
