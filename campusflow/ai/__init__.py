"""AI layer: Gemini shim + crowd/demand predictor."""
from .llm import GeminiClient, LLMError, build_client
from .predictor import CampusPredictor, default_predictor, forecast_demand, predict_crowd

__all__ = [
    "CampusPredictor",
    "GeminiClient",
    "LLMError",
    "build_client",
    "default_predictor",
    "forecast_demand",
    "predict_crowd",
]
