from dataclasses import dataclass, field
from typing import List, Optional

from story_assembly.models.structured_story.story_image import StoryImage
from story_assembly.models.structured_story.story_part import StoryPart, TextPart, ImagePart


@dataclass(frozen=True)
class StructuredStoryContent:
    """Ordered text and image parts of a story plus the images they reference."""
    parts: List[StoryPart] = field(default_factory=list)
    images: List[StoryImage] = field(default_factory=list)

    def __post_init__(self):
        for part in self.parts:
            if isinstance(part, ImagePart) and not 0 <= part.image_index < len(self.images):
                raise ValueError(
                    f"Image part references index {part.image_index} but only {len(self.images)} images are available"
                )

    @property
    def plain_text(self) -> str:
        """Concatenation of every text part, for consumers without structured content support."""
        return "".join(part.content for part in self.parts if isinstance(part, TextPart))

    @property
    def first_image_data(self) -> Optional[bytes]:
        return self.images[0].data if self.images else None

    def to_dict(self) -> dict:
        return {
            "parts": [part.to_dict() for part in self.parts],
            "images": [image.to_dict() for image in self.images]
        }
