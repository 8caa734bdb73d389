from dataclasses import dataclass
from typing import List

from story_assembly.models.structured_story.story_image import StoryImage
from story_assembly.models.structured_story.structured_story_content import StructuredStoryContent
from story_assembly.models.structured_story.structured_story_util import StructuredStoryUtil


@dataclass(frozen=True)
class StoryResult:
    """
    The persisted form of a generated story.

    The structured content is stored as an opaque JSON string; `text` is the flattened
    fallback kept alongside it for readers that only understand plain content.
    """
    structured_content: StructuredStoryContent

    @property
    def text(self) -> str:
        return self.structured_content.plain_text

    @property
    def images(self) -> List[StoryImage]:
        return self.structured_content.images

    def to_json(self) -> str:
        return StructuredStoryUtil.to_json(self.structured_content)

    @classmethod
    def from_json(cls, json_text: str) -> "StoryResult":
        """
        Load a result from its persisted JSON string.

        Raises:
            FormatError: if the JSON is not a valid structured story.
        """
        return cls(structured_content=StructuredStoryUtil.from_json(json_text))
