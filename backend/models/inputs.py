from dataclasses import dataclass
from enum import Enum

class Modality(str, Enum):
    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"
    URL = "url"

    @property
    def is_url(self) -> bool:
        return self is not Modality.TEXT

@dataclass(frozen=True)
class ValidationInput:
    """A single piece of submitted content tagged with its modality."""
    modality: Modality
    value: str

    @property
    def subject(self) -> str:
        """The string the rules inspect: URLs are trimmed, text is kept as submitted."""
        return self.value.strip() if self.modality.is_url else self.value
