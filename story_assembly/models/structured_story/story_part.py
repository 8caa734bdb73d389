import enum
from dataclasses import dataclass
from typing import Union


class PartType(enum.Enum):
    """Discriminator written in the "type" field of a serialized part."""
    TEXT = "text"
    IMAGE = "image"


@dataclass(frozen=True)
class TextPart:
    """A run of story text. It keeps its own whitespace, parts are joined without a separator."""
    content: str

    @property
    def part_type(self) -> PartType:
        return PartType.TEXT

    def to_dict(self) -> dict:
        return {
            "type": self.part_type.value,
            "content": self.content
        }


@dataclass(frozen=True)
class ImagePart:
    """A reference to an illustration, by position in the sibling image list."""
    image_index: int
    alt_text: str

    @property
    def part_type(self) -> PartType:
        return PartType.IMAGE

    def to_dict(self) -> dict:
        return {
            "type": self.part_type.value,
            "imageIndex": self.image_index,
            "altText": self.alt_text
        }


StoryPart = Union[TextPart, ImagePart]
