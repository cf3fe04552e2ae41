"""
Static registry of the Gemini models the service accepts.

Rationale:
- A local allow-list rejects unknown ids before any network call.
- Defined once at import; nothing mutates it afterwards.
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Tuple


@dataclass(frozen=True)
class ModelConfig:
    id: str
    name: str
    description: str


AVAILABLE_MODELS: Tuple[ModelConfig, ...] = (
    ModelConfig(
        id="gemini-1.5-flash",
        name="Gemini 1.5 Flash",
        description="Fast and cheap - good for most prompts",
    ),
    ModelConfig(
        id="gemini-1.5-pro",
        name="Gemini 1.5 Pro",
        description="More capable - for complex analysis",
    ),
)

DEFAULT_MODEL = "gemini-1.5-flash"


def list_models() -> List[ModelConfig]:
    return list(AVAILABLE_MODELS)


def get_model_by_id(model_id: Any) -> Optional[ModelConfig]:
    """Exact, case-sensitive lookup. Returns None when not registered."""
    for model in AVAILABLE_MODELS:
        if model.id == model_id:
            return model
    return None


def is_valid_model_id(model_id: Any) -> bool:
    if not isinstance(model_id, str) or not model_id:
        return False
    return get_model_by_id(model_id) is not None


def default_model_id() -> str:
    return DEFAULT_MODEL
