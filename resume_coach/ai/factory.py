from resume_coach.ai.config import load_ai_config
from resume_coach.ai.types import CompletionClient

from resume_coach.ai.providers.openai_provider import OpenAIProvider


def get_ai_client() -> CompletionClient:
    cfg = load_ai_config()

    if cfg.provider == "openai":
        return OpenAIProvider(
            model=cfg.model,
            temperature=cfg.temperature,
            timeout_s=cfg.timeout_s,
            max_retries=cfg.max_retries,
        )

    raise ValueError(f"Unsupported AI_PROVIDER='{cfg.provider}'")
