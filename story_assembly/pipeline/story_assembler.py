from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Union

import structlog

from story_assembly.config.assembly_config import AssemblyConfig
from story_assembly.languages.language_profile import LanguageProfile
from story_assembly.languages.language_registry import LanguageRegistry
from story_assembly.models.structured_story.story_part import StoryPart, TextPart, ImagePart
from story_assembly.models.structured_story.story_result import StoryResult
from story_assembly.models.structured_story.structured_story_content import StructuredStoryContent
from story_assembly.processing.image_placement import ImagePlacement, PARAGRAPH_SEPARATOR
from story_assembly.processing.text_normalizer import TextNormalizer
from story_assembly.processing.title_extractor import TitleExtractor
from story_assembly.responses.gemini_response_parser import GeminiResponseParser, RawStoryResponse

logger = structlog.get_logger()


@dataclass(frozen=True)
class AssembledStory:
    """A cleaned, titled story ready to be stored and displayed."""
    title: str
    result: StoryResult
    was_repositioned: bool = False

    @property
    def plain_text(self) -> str:
        return self.result.text

    def to_record(self) -> dict:
        """
        The fields persisted for a story: the structured content as an opaque JSON string
        and the flattened text for readers that do not understand it.
        """
        return {
            "title": self.title,
            "content": self.plain_text,
            "structured_content": self.result.to_json()
        }


class StoryAssembler:
    """
    Runs the full cleanup of a generated story: preamble removal, title extraction,
    title de-duplication and image placement, and wraps the outcome in a StoryResult.

    The assembler keeps no state between calls, so one instance can serve concurrent requests.

    Args:
        config (AssemblyConfig): Heuristic constants and parsing options.
        profile (LanguageProfile): Language of the story, defaults to the one named in the config.
        clock (Callable[[], datetime]): Time source for generic titles.
    """

    def __init__(
            self,
            config: AssemblyConfig = None,
            profile: LanguageProfile = None,
            clock: Callable[[], datetime] = datetime.now,
    ):
        self.config = config if config is not None else AssemblyConfig()
        self.profile = profile if profile is not None else LanguageRegistry.get_language(self.config.language)
        self.normalizer = TextNormalizer(self.profile)
        self.extractor = TitleExtractor(self.profile, clock=clock)
        self.placement = ImagePlacement(self.config)
        self.parser = GeminiResponseParser(
            self.profile,
            verify_images=self.config.verify_images,
            strip_image_markers=self.config.strip_image_markers
        )

    @staticmethod
    def _segments(parts: List[StoryPart]) -> List[Union[str, ImagePart]]:
        """Merge consecutive text parts so that text and images alternate."""
        segments: List[Union[str, ImagePart]] = []
        for part in parts:
            if isinstance(part, TextPart):
                if segments and isinstance(segments[-1], str):
                    segments[-1] += part.content
                else:
                    segments.append(part.content)
            else:
                segments.append(part)
        return segments

    def _clean_parts(self, parts: List[StoryPart], title: str) -> List[StoryPart]:
        cleaned: List[Union[str, ImagePart]] = []
        first_text = True
        for segment in self._segments(parts):
            if isinstance(segment, ImagePart):
                cleaned.append(segment)
                continue

            text = self.normalizer.normalize(segment) if first_text else self.normalizer.collapse_newlines(segment)
            first_text = False
            text = self.extractor.clean_body(text, title)
            if text:
                cleaned.append(text)

        last_text = max((i for i, segment in enumerate(cleaned) if isinstance(segment, str)), default=-1)
        return [
            TextPart(content=segment if i == last_text else segment + PARAGRAPH_SEPARATOR)
            if isinstance(segment, str) else segment
            for i, segment in enumerate(cleaned)
        ]

    def assemble(self, raw: RawStoryResponse) -> AssembledStory:
        """
        Clean a raw response and lay out its images.

        Args:
            raw: Parts and images in the order the model produced them

        Returns:
            AssembledStory with the title and the structured result
        """
        title = self.extractor.extract_title(self.normalizer.normalize(raw.text))
        parts = self._clean_parts(raw.parts, title)

        was_repositioned = not self.placement.is_properly_distributed(parts)
        parts = self.placement.arrange(parts, raw.images)

        content = StructuredStoryContent(parts=parts, images=list(raw.images))
        logger.info(
            "story_assembled",
            title=title,
            characters=len(content.plain_text),
            images=len(content.images),
            repositioned=was_repositioned,
        )
        return AssembledStory(title=title, result=StoryResult(structured_content=content), was_repositioned=was_repositioned)

    def assemble_response(self, response: dict) -> AssembledStory:
        """
        Parse a generateContent response and assemble it.

        Raises:
            ResponseFormatError: if the response envelope is malformed
        """
        return self.assemble(self.parser.parse(response))

    def assemble_text(self, text: str) -> AssembledStory:
        """Assemble a text-only story, such as one collected from a streamed completion."""
        return self.assemble(RawStoryResponse(parts=[TextPart(content=text)] if text else []))
