"""
Request/response models.

Rationale:
- Define simple, explicit input/output contracts for the API.
- Keep models minimal so the frontend knows exactly what to send and expect.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .errors import ProviderResponseError


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(v) for v in value]


@dataclass(frozen=True)
class AnalysisRequest:
    # Raw body values; analyze() does the type checks.
    prompt: Any = None
    model: Any = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "AnalysisRequest":
        return cls(prompt=payload.get("prompt"), model=payload.get("model"))


class FeedbackResult(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    pros: List[str] = Field(default_factory=list)
    cons: List[str] = Field(default_factory=list)
    improved_prompt: str = Field(default="", alias="improvedPrompt")

    @classmethod
    def from_provider(cls, data: Any) -> "FeedbackResult":
        """Default missing fields to empty; reject anything that isn't an object."""
        if not isinstance(data, dict):
            raise ProviderResponseError("Error analyzing prompt")
        return cls(
            pros=_string_list(data.get("pros")),
            cons=_string_list(data.get("cons")),
            improved_prompt=str(data.get("improvedPrompt") or ""),
        )

    def to_response(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class ErrorResponse(BaseModel):
    error: str


class ModelInfo(BaseModel):
    id: str
    name: str
    description: str


class ModelsResponse(BaseModel):
    models: List[ModelInfo]
    default: str


class HealthResponse(BaseModel):
    ok: bool = True
    service: Optional[str] = None
