from dataclasses import dataclass, field
from typing import List

DEFAULT_LANGUAGE = "english"


@dataclass
class StoryRequest:
    """Parameters chosen by the user for one story."""
    age_group: str
    story_length: str
    characters: List[str] = field(default_factory=list)
    setting: str = ""
    moral_message: str = ""
    language: str = DEFAULT_LANGUAGE
    max_tokens: int = 2000
    with_images: bool = True

    def __post_init__(self):
        if self.max_tokens <= 0:
            raise ValueError("max_tokens must be positive")
