"""Sampling options accepted by the AI actions.

Temperature is a number in [0, 1] or one of the presets ``accurate`` (0) /
``creative`` (1). Presence and frequency penalties are a number in [-1, 1]
or ``allow`` (-1) / ``default`` (0) / ``restrict`` (1).
"""

from typing import Annotated

from pydantic import BaseModel, BeforeValidator, Field

TEMPERATURE_PRESETS = {"accurate": 0.0, "creative": 1.0}
PENALTY_PRESETS = {"allow": -1.0, "default": 0.0, "restrict": 1.0}


def _preset(presets: dict[str, float]):
    def resolve(value):
        if isinstance(value, str):
            if value not in presets:
                raise ValueError(f"unknown preset {value!r}, expected one of {sorted(presets)}")
            return presets[value]
        return value

    return resolve


Temperature = Annotated[float, BeforeValidator(_preset(TEMPERATURE_PRESETS)), Field(ge=0, le=1)]
Penalty = Annotated[float, BeforeValidator(_preset(PENALTY_PRESETS)), Field(ge=-1, le=1)]


class GenerationOptions(BaseModel):
    """Resolved generation options; presets are converted on parse."""

    temperature: Temperature = 0.0
    presence: Penalty = 0.0
    frequency: Penalty = 0.0
    max_tokens: int = Field(default=1024, gt=0)
