import re
from dataclasses import dataclass, field
from typing import List

import structlog

from story_assembly.errors import ImageDecodeError, ResponseFormatError
from story_assembly.languages.language_profile import LanguageProfile
from story_assembly.models.structured_story.story_image import StoryImage
from story_assembly.models.structured_story.story_part import StoryPart, TextPart, ImagePart
from story_assembly.utils.image_payload import decode_image_payload

logger = structlog.get_logger()

IMAGE_MARKER = re.compile(r'\[Image:([^\]]+)\]', re.IGNORECASE)


@dataclass(frozen=True)
class RawStoryResponse:
    """Text and image parts in the order the model returned them, before any cleanup."""
    parts: List[StoryPart] = field(default_factory=list)
    images: List[StoryImage] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(part.content for part in self.parts if isinstance(part, TextPart))


class GeminiResponseParser:
    """
    Turns a generateContent response with interleaved text and inline images into raw story parts.

    Only inline data whose mime type starts with "image/" is treated as an image. An image whose
    payload cannot be decoded is skipped on its own, the rest of the response is kept.

    Args:
        profile (LanguageProfile): Language of the fallback alt text.
        verify_images (bool): Open each payload with Pillow instead of only checking the base64.
        strip_image_markers (bool): Remove [Image: ...] markers from the text once their alt text is read.
    """

    def __init__(self, profile: LanguageProfile, verify_images: bool = True, strip_image_markers: bool = True):
        self.profile = profile
        self.verify_images = verify_images
        self.strip_image_markers = strip_image_markers

    @staticmethod
    def _response_parts(response: dict) -> list:
        try:
            parts = response["candidates"][0]["content"]["parts"]
        except (KeyError, IndexError, TypeError) as e:
            raise ResponseFormatError(f"Response has no candidates[0].content.parts: {e!r}") from e
        if not isinstance(parts, list):
            raise ResponseFormatError("Response content parts must be a list")
        return parts

    def alt_text_for(self, image_index: int, text_so_far: str, marker_index: int = None) -> str:
        """
        Description from the [Image: ...] marker at `marker_index` (the image's position among all
        image parts, rejected ones included), or a fallback numbered by `image_index`.
        """
        if marker_index is None:
            marker_index = image_index
        markers = IMAGE_MARKER.findall(text_so_far)
        if marker_index < len(markers) and markers[marker_index].strip():
            return markers[marker_index].strip()
        return f"{self.profile.illustration_alt_text} {image_index + 1}"

    @staticmethod
    def remove_image_markers(text: str) -> str:
        return IMAGE_MARKER.sub('', text)

    def parse(self, response: dict) -> RawStoryResponse:
        """
        Parse a generation response.

        Args:
            response: The decoded JSON body of the API response

        Returns:
            RawStoryResponse with the parts in response order

        Raises:
            ResponseFormatError: if the candidates/content/parts envelope is missing
        """
        parts: List[StoryPart] = []
        images: List[StoryImage] = []
        text_so_far = ""
        image_parts_seen = 0

        for position, part in enumerate(self._response_parts(response)):
            if not isinstance(part, dict):
                continue

            text = part.get("text")
            if isinstance(text, str):
                text_so_far += text
                parts.append(TextPart(content=text))

            inline_data = part.get("inlineData")
            if not isinstance(inline_data, dict):
                continue
            mime_type = inline_data.get("mimeType")
            if not isinstance(mime_type, str) or not mime_type.startswith("image/"):
                continue
            marker_index = image_parts_seen
            image_parts_seen += 1

            try:
                data = decode_image_payload(inline_data.get("data"), verify=self.verify_images)
            except ImageDecodeError as e:
                logger.warning("skipped_invalid_image", part=position, mime_type=mime_type, reason=str(e))
                continue

            image_index = len(images)
            alt_text = self.alt_text_for(image_index, text_so_far, marker_index)
            images.append(StoryImage(data=data, alt_text=alt_text, index=image_index))
            parts.append(ImagePart(image_index=image_index, alt_text=alt_text))

        if self.strip_image_markers:
            parts = [
                TextPart(content=self.remove_image_markers(part.content)) if isinstance(part, TextPart) else part
                for part in parts
            ]
            parts = [part for part in parts if not isinstance(part, TextPart) or part.content]

        logger.info("response_parsed", parts=len(parts), images=len(images))
        return RawStoryResponse(parts=parts, images=images)
