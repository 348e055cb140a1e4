from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field

FORM_NAMES: Tuple[str, ...] = (
    "Haiku",
    "Sonnet",
    "Limerick",
    "Ode",
    "Villanelle",
    "Elegy",
    "Ballad",
    "Epigram",
    "Acrostic",
    "Free Verse",
)

FREE_VERSE = "Free Verse"


class Poem(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    style: str
    prompt: str
    doom: int = Field(..., ge=0, le=100)
    date: datetime


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    message: str
