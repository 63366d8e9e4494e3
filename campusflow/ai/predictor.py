# campusflow/ai/predictor.py
from __future__ import annotations

import json
import logging
from functools import lru_cache
from typing import List, Optional

from pydantic import ValidationError

from campusflow.ai.llm import CROWD_PREDICTION_SCHEMA, GeminiClient, LLMError, build_client
from campusflow.models import CrowdLevel, DemandForecast, PredictionResult
from campusflow.prompts import PromptRegistry
from campusflow.settings import Settings, get_settings

logger = logging.getLogger(__name__)

# ----------------------------
# Degraded-mode defaults
# ----------------------------
NO_KEY_PREDICTION = PredictionResult(
    crowd_level=CrowdLevel.MEDIUM.value,
    estimated_wait_minutes=15,
    confidence=0.5,
    reasoning="API key not configured. Using default prediction based on typical weekday patterns.",
)

FALLBACK_PREDICTION = PredictionResult(
    crowd_level=CrowdLevel.MEDIUM.value,
    estimated_wait_minutes=15,
    confidence=0.5,
    reasoning="Based on typical weekday patterns.",
)

DEFAULT_DEMAND: List[str] = [
    "South Indian Thali",
    "Hyderabadi Biryani",
    "Butter Masala Dosa",
    "Filtered Coffee",
    "Fresh Fruit Bowl",
]

DEMAND_ITEM_COUNT = 5


# ----------------------------
# Parsing
# ----------------------------
def parse_prediction(text: Optional[str]) -> PredictionResult:
    """Raises json.JSONDecodeError / ValidationError on bad bodies; empty reads as {}."""
    return PredictionResult.model_validate(json.loads(text or "{}"))


def parse_demand_list(text: Optional[str]) -> DemandForecast:
    return [item.strip() for item in (text or "").split(",") if item.strip()]


# ----------------------------
# CampusPredictor
# ----------------------------
class CampusPredictor:
    """
    Crowd and canteen-demand predictions backed by Gemini.

    Both operations always return a value: with no client (no API key) they
    return fixed defaults, and any upstream or parsing failure is logged and
    replaced by the fallback. Nothing is raised to the caller.

    Usage:
        predictor = CampusPredictor(build_client())
        result = await predictor.predict_crowd("Main Canteen", "Monday", "12:30")
        items = await predictor.forecast_demand("Monday")
    """

    def __init__(
        self,
        llm: Optional[GeminiClient] = None,
        registry: Optional[PromptRegistry] = None,
        campus: Optional[str] = None,
    ):
        self.llm = llm
        self.registry = registry or PromptRegistry(base_dir=get_settings().CAMPUSFLOW_PROMPTS_DIR)
        self.campus = campus or get_settings().CAMPUS_NAME

    @property
    def enabled(self) -> bool:
        return self.llm is not None

    # -------- public API --------

    async def predict_crowd(
        self,
        module: str,
        day: str,
        time: str,
        context: str = "",
    ) -> PredictionResult:
        if self.llm is None:
            logger.debug("No LLM client; default crowd prediction for %s", module)
            return NO_KEY_PREDICTION

        try:
            prompt = self.registry.render(
                "crowd_prediction",
                {
                    "module": module,
                    "campus": self.campus,
                    "day": day,
                    "time": time,
                    "context": context,
                    "levels": [lvl.value for lvl in CrowdLevel],
                },
            )
            text = await self.llm.generate(
                prompt,
                schema=CROWD_PREDICTION_SCHEMA,
                system=self.registry.get_system_message("crowd"),
            )
            return parse_prediction(text)
        except LLMError as e:
            logger.warning("Crowd prediction call failed for %s: %s", module, e)
        except json.JSONDecodeError as e:
            logger.warning("Crowd prediction for %s was not valid JSON: %s", module, e)
        except ValidationError as e:
            logger.warning(
                "Crowd prediction for %s did not match schema (%d errors)", module, e.error_count()
            )
        except Exception:
            logger.exception("Unexpected error predicting crowd for %s", module)
        return FALLBACK_PREDICTION

    async def forecast_demand(self, day: str) -> DemandForecast:
        if self.llm is None:
            logger.debug("No LLM client; default demand forecast for %s", day)
            return list(DEFAULT_DEMAND)

        try:
            prompt = self.registry.render(
                "demand_forecast", {"day": day, "count": DEMAND_ITEM_COUNT}
            )
            text = await self.llm.generate(prompt, system=self.registry.get_system_message("demand"))
            return parse_demand_list(text)
        except LLMError as e:
            logger.warning("Demand forecast call failed for %s: %s", day, e)
        except Exception:
            logger.exception("Unexpected error forecasting demand for %s", day)
        return list(DEFAULT_DEMAND)


# ----------------------------
# Process-wide instance
# ----------------------------
@lru_cache(maxsize=None)
def default_predictor() -> CampusPredictor:
    # Built once; a missing key or unreadable config keeps the process in degraded mode.
    try:
        settings = get_settings()
    except ValidationError as e:
        logger.error("Invalid campusflow settings (%d errors); using default predictions", e.error_count())
        campus = Settings.model_fields["CAMPUS_NAME"].default
        return CampusPredictor(None, registry=PromptRegistry(), campus=campus)
    return CampusPredictor(
        build_client(settings),
        registry=PromptRegistry(base_dir=settings.CAMPUSFLOW_PROMPTS_DIR),
        campus=settings.CAMPUS_NAME,
    )


async def predict_crowd(module: str, day: str, time: str, context: str = "") -> PredictionResult:
    return await default_predictor().predict_crowd(module, day, time, context)


async def forecast_demand(day: str) -> DemandForecast:
    return await default_predictor().forecast_demand(day)
