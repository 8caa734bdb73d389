import base64
import binascii
import json
import uuid
from typing import List

from story_assembly.errors import FormatError
from story_assembly.models.structured_story.story_image import StoryImage
from story_assembly.models.structured_story.story_part import PartType, StoryPart, TextPart, ImagePart
from story_assembly.models.structured_story.structured_story_content import StructuredStoryContent


class StructuredStoryUtil:
    """
    Serialization helpers for structured story content.

    The JSON layout is the one stored by the app:
        {"parts": [{"type": "text", "content": ...},
                   {"type": "image", "imageIndex": 0, "altText": ...}],
         "images": [{"id": ..., "data": <base64>, "altText": ..., "index": 0}]}
    """

    @staticmethod
    def _require(data: dict, key: str, expected_type, context: str):
        if key not in data:
            raise FormatError(f"Missing '{key}' in {context}")
        value = data[key]
        # bool is an int subclass, an index of true/false is not accepted
        if not isinstance(value, expected_type) or (expected_type is int and isinstance(value, bool)):
            raise FormatError(f"Field '{key}' in {context} must be of type {expected_type.__name__}")
        return value

    @staticmethod
    def parse_part(data: dict) -> StoryPart:
        """
        Parse one serialized part, matching the "type" discriminator exactly.

        Raises:
            FormatError: if the discriminator is missing or unknown, or a required field is absent.
        """
        if not isinstance(data, dict):
            raise FormatError("Story part must be an object")
        if "type" not in data:
            raise FormatError("Story part is missing the 'type' discriminator")

        part_type = data["type"]
        if part_type == PartType.TEXT.value:
            return TextPart(content=StructuredStoryUtil._require(data, "content", str, "text part"))
        if part_type == PartType.IMAGE.value:
            return ImagePart(
                image_index=StructuredStoryUtil._require(data, "imageIndex", int, "image part"),
                alt_text=StructuredStoryUtil._require(data, "altText", str, "image part")
            )
        raise FormatError(f"Unknown story part type: {part_type!r}")

    @staticmethod
    def parse_image(data: dict) -> StoryImage:
        """Parse one serialized image. Raises FormatError on missing fields or bad base64."""
        if not isinstance(data, dict):
            raise FormatError("Story image must be an object")

        raw_id = StructuredStoryUtil._require(data, "id", str, "image")
        encoded = StructuredStoryUtil._require(data, "data", str, "image")
        alt_text = StructuredStoryUtil._require(data, "altText", str, "image")
        index = StructuredStoryUtil._require(data, "index", int, "image")

        try:
            image_id = uuid.UUID(raw_id)
        except ValueError as e:
            raise FormatError(f"Invalid image id {raw_id!r}") from e

        try:
            image_data = base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as e:
            raise FormatError(f"Image {index} has a malformed base64 payload") from e

        return StoryImage(data=image_data, alt_text=alt_text, index=index, id=image_id)

    @staticmethod
    def from_dict(data: dict) -> StructuredStoryContent:
        """
        Build structured content from its dictionary form.

        Raises:
            FormatError: if any part or image is malformed or a part references a missing image.
        """
        if not isinstance(data, dict):
            raise FormatError("Structured story content must be an object")

        raw_parts = StructuredStoryUtil._require(data, "parts", list, "structured content")
        raw_images = StructuredStoryUtil._require(data, "images", list, "structured content")

        parts: List[StoryPart] = [StructuredStoryUtil.parse_part(part) for part in raw_parts]
        images: List[StoryImage] = [StructuredStoryUtil.parse_image(image) for image in raw_images]

        try:
            return StructuredStoryContent(parts=parts, images=images)
        except ValueError as e:
            raise FormatError(str(e)) from e

    @staticmethod
    def to_json(content: StructuredStoryContent) -> str:
        """Serialize structured content to the JSON string stored with the story."""
        return json.dumps(content.to_dict(), ensure_ascii=False)

    @staticmethod
    def from_json(json_text: str) -> StructuredStoryContent:
        """
        Inverse of `to_json`. No partial content is ever returned.

        Raises:
            FormatError: if the text is not JSON or does not describe valid structured content.
        """
        try:
            data = json.loads(json_text)
        except (json.JSONDecodeError, TypeError) as e:
            raise FormatError(f"Structured content is not valid JSON: {e}") from e
        return StructuredStoryUtil.from_dict(data)

    @staticmethod
    def flatten(parts: List[StoryPart]) -> str:
        """Concatenate the text parts of a part list in order."""
        return "".join(part.content for part in parts if isinstance(part, TextPart))

    @staticmethod
    def count_images(parts: List[StoryPart]) -> int:
        return sum(1 for part in parts if isinstance(part, ImagePart))
