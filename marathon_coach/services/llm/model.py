"""LLM model abstraction for consistent model access across the package."""

import os

from marathon_coach.config.settings import settings


def get_model(provider: str | None = None, model_name: str | None = None) -> str:
    """Resolve the pydantic-ai model identifier (e.g. "openai:gpt-4o-mini").

    Raises:
        ValueError: If the provider is not supported
    """
    provider = provider or settings.llm_provider
    model_name = model_name or settings.llm_model

    if provider == "openai":
        # Ensure OPENAI_API_KEY is set from settings for pydantic_ai
        if settings.openai_api_key and not os.getenv("OPENAI_API_KEY"):
            os.environ["OPENAI_API_KEY"] = settings.openai_api_key
        return f"openai:{model_name}"

    raise ValueError(f"Unsupported LLM provider: {provider}")
