from enum import Enum

from pydantic import BaseModel, Field


class SceneMode(str, Enum):
    CINEMATIC = "Cinematic"
    ETHEREAL = "Ethereal"
    INDUSTRIAL = "Industrial"
    ORGANIC = "Organic"
    GEOMETRIC = "Geometric"


class CardSource(str, Enum):
    WORD = "word"
    CHARACTER = "character"


class PhoneticMap(BaseModel):
    sound: str
    object: str
    role: str


class MnemonicResult(BaseModel):
    """Payload produced by the generation service for one word or character."""

    word: str
    mode: SceneMode = SceneMode.CINEMATIC
    definition: str = ""
    phonetic_mapping: list[PhoneticMap] = Field(default_factory=list)
    functional_extraction: list[str] = Field(default_factory=list)
    scene_description: str = ""
    render_prompt: str = ""
    image_url: str | None = None
    source: CardSource = CardSource.WORD


class HistoryEntry(BaseModel):
    word: str
    mode: SceneMode
    result: MnemonicResult
    timestamp_ms: int


class HistoryList(BaseModel):
    items: list[HistoryEntry]
    total: int
