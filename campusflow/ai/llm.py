# campusflow/ai/llm.py
from __future__ import annotations
import logging
from typing import Any, Optional

from google import genai
from google.genai import types

from campusflow.settings import Settings, get_settings

logger = logging.getLogger(__name__)


class LLMError(RuntimeError):
    """Raised when the upstream completion call fails."""
    pass


# -----------------------
# Env helpers
# -----------------------
def is_disabled(settings: Optional[Settings] = None) -> bool:
    return (settings or get_settings()).llm_disabled


# -----------------------
# Response schemas
# -----------------------
CROWD_PREDICTION_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "crowdLevel": types.Schema(type=types.Type.STRING),
        "estimatedWaitMinutes": types.Schema(type=types.Type.NUMBER),
        "confidence": types.Schema(type=types.Type.NUMBER),
        "reasoning": types.Schema(type=types.Type.STRING),
    },
    required=["crowdLevel", "estimatedWaitMinutes", "confidence", "reasoning"],
)


# -----------------------
# Client
# -----------------------
class GeminiClient:
    """
    Thin async wrapper around the google-genai SDK.
    One call per generate(); no retries, no streaming, no chat history.
    """

    def __init__(
        self,
        api_key: str,
        model: Optional[str] = None,
        timeout_s: Optional[float] = None,
        client: Any = None,
    ):
        self.model = model or get_settings().GEMINI_MODEL
        if client is not None:
            self.client = client
            return
        if not api_key:
            raise LLMError("Gemini API key not set")
        http_options = None
        if timeout_s:
            # SDK timeout is in milliseconds
            http_options = types.HttpOptions(timeout=int(timeout_s * 1000))
        self.client = genai.Client(api_key=api_key, http_options=http_options)

    async def generate(
        self,
        prompt: str,
        *,
        schema: Optional[types.Schema] = None,
        system: Optional[str] = None,
    ) -> str:
        config_kwargs: dict = {}
        if schema is not None:
            config_kwargs["response_mime_type"] = "application/json"
            config_kwargs["response_schema"] = schema
        if system:
            config_kwargs["system_instruction"] = system
        config = types.GenerateContentConfig(**config_kwargs) if config_kwargs else None

        try:
            resp = await self.client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
                config=config,
            )
        except Exception as e:
            raise LLMError(f"Gemini call failed ({type(e).__name__}): {e}") from e
        return resp.text or ""


def build_client(settings: Optional[Settings] = None) -> Optional[GeminiClient]:
    """
    Returns a configured client, or None when no usable key is available
    (missing/blank key, disabled via CAMPUSFLOW_DISABLE_LLM=1, or SDK refused to init).
    """
    s = settings or get_settings()
    if is_disabled(s):
        logger.info("LLM disabled via CAMPUSFLOW_DISABLE_LLM=1; using default predictions")
        return None
    key = s.api_key
    if not key:
        logger.debug("No GEMINI_API_KEY/GOOGLE_API_KEY configured; using default predictions")
        return None
    try:
        client = GeminiClient(api_key=key, model=s.GEMINI_MODEL, timeout_s=s.LLM_REQUEST_TIMEOUT)
    except Exception:
        logger.exception("Could not initialise Gemini client; using default predictions")
        return None
    logger.info("Gemini client ready (model=%s)", client.model)
    return client
