# campusflow/models.py
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Union

from pydantic import BaseModel, ConfigDict, Field


class CrowdLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


# ---------- Crowd prediction ----------
class PredictionResult(BaseModel):
    """
    One crowd prediction as returned by the model.

    Values are taken as parsed: crowd_level is not checked against CrowdLevel
    and confidence/wait are not range-clamped.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    crowd_level: str = Field(alias="crowdLevel")
    estimated_wait_minutes: Union[int, float] = Field(alias="estimatedWaitMinutes")
    confidence: Union[int, float]
    reasoning: str

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


# ---------- Demand forecast ----------
# Ordered item names, best-selling first; usually 5 but not enforced.
DemandForecast = List[str]
