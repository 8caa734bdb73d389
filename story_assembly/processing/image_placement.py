import math
import re
from typing import Iterable, List, Sequence, Tuple

import structlog

from story_assembly.config.assembly_config import AssemblyConfig
from story_assembly.models.structured_story.story_image import StoryImage
from story_assembly.models.structured_story.story_part import StoryPart, TextPart, ImagePart

logger = structlog.get_logger()

PARAGRAPH_SEPARATOR = "\n\n"

_PARAGRAPH_BREAK = re.compile(r'\n[ \t]*\n')
# A sentence runs up to its closing punctuation and any quotes or brackets closing with it;
# trailing text without one is a sentence too
_SENTENCE = re.compile(r'[^.!?]*[.!?]+["\'\u201d\u2019\u00bb)\]]*|[^.!?]+')


class ImagePlacement:
    """
    Checks how a model interleaved its images with the story text and re-flows them when
    they are bunched up, typically all at the end of the response.

    Images are re-inserted after paragraphs (or after sentences for short texts) at fixed
    fractions of the text: the middle for one image, thirds for two, quarters for three.

    Args:
        config (AssemblyConfig): Threshold and quantile constants.
    """

    def __init__(self, config: AssemblyConfig = None):
        self.config = config if config is not None else AssemblyConfig()

    def is_properly_distributed(self, parts: Sequence[StoryPart]) -> bool:
        """
        Decide whether the images in `parts` are already spread through the text.

        Parts without images are always distributed. Images with no text, images that all
        come after the last text part, or too few images before the last text part are not.
        """
        text_positions = [i for i, part in enumerate(parts) if isinstance(part, TextPart)]
        image_positions = [i for i, part in enumerate(parts) if isinstance(part, ImagePart)]

        if not image_positions:
            return True
        if not text_positions:
            return False

        last_text = text_positions[-1]
        if image_positions[0] > last_text:
            return False

        interspersed = sum(1 for position in image_positions if position <= last_text)
        return interspersed / len(image_positions) >= self.config.distribution_threshold

    @staticmethod
    def _paragraph_spans(text: str) -> Iterable[Tuple[int, int]]:
        start = 0
        for paragraph_break in _PARAGRAPH_BREAK.finditer(text):
            yield start, paragraph_break.start()
            start = paragraph_break.end()
        yield start, len(text)

    @staticmethod
    def _sentence_spans(text: str) -> Iterable[Tuple[int, int]]:
        return (match.span() for match in _SENTENCE.finditer(text))

    @staticmethod
    def _cut_units(text: str, spans: Iterable[Tuple[int, int]]) -> List[str]:
        """
        Cut `text` into units, one per non-blank span.

        Each unit runs from the start of its own words to the start of the next unit, so the
        whitespace between two units stays with the first one and joining the units gives
        back `text` unchanged.
        """
        starts = []
        for start, end in spans:
            piece = text[start:end]
            if piece.strip():
                starts.append(start + len(piece) - len(piece.lstrip()))
        if not starts:
            return []
        starts[0] = 0
        return [text[start:end] for start, end in zip(starts, starts[1:] + [len(text)])]

    @classmethod
    def paragraph_units(cls, text: str) -> List[str]:
        return cls._cut_units(text, cls._paragraph_spans(text))

    @classmethod
    def sentence_units(cls, text: str) -> List[str]:
        return cls._cut_units(text, cls._sentence_spans(text))

    @classmethod
    def split_paragraphs(cls, text: str) -> List[str]:
        return [unit.strip() for unit in cls.paragraph_units(text)]

    @classmethod
    def split_sentences(cls, text: str) -> List[str]:
        return [unit.strip() for unit in cls.sentence_units(text)]

    def fractions_for(self, image_count: int) -> List[float]:
        """Fractions of the text after which `image_count` images are inserted."""
        if image_count <= 0:
            return []
        if image_count in self.config.quantile_fractions and image_count <= self.config.max_quantile_images:
            return list(self.config.quantile_fractions[image_count])
        return [i / (image_count + 1) for i in range(1, image_count + 1)]

    def compute_positions(self, image_count: int, unit_count: int) -> List[int]:
        """
        Indexes of the units after which an image is inserted.

        Each position is floor(fraction * unit_count), clamped so that no image lands
        after the last unit, then deduplicated and sorted.
        """
        if image_count <= 0 or unit_count < 2:
            return []

        upper = unit_count - 2
        positions = set()
        for fraction in self.fractions_for(image_count):
            position = math.floor(fraction * unit_count)
            positions.add(min(max(position, 0), upper))
        return sorted(positions)

    @staticmethod
    def _image_queue(parts: Sequence[StoryPart], images: Sequence[StoryImage]) -> List[ImagePart]:
        alt_texts = {part.image_index: part.alt_text for part in parts if isinstance(part, ImagePart)}
        return [ImagePart(image_index=i, alt_text=alt_texts.get(i, image.alt_text)) for i, image in enumerate(images)]

    def reposition(self, parts: Sequence[StoryPart], images: Sequence[StoryImage]) -> List[StoryPart]:
        """
        Build a new part list with the images spread through the text.

        The original interleaving is discarded: the text is cut into paragraphs, or into
        sentences when there are too few paragraphs, and images are inserted in extraction
        order after the units at the computed positions. Images left over are appended.
        The text parts keep the original whitespace, so the flattened text does not change.
        """
        queue = self._image_queue(parts, images)
        text = "".join(part.content for part in parts if isinstance(part, TextPart))

        units = self.paragraph_units(text)
        sentence_mode = len(units) < self.config.min_paragraphs_for_paragraph_mode
        if sentence_mode:
            units = self.sentence_units(text)

        new_parts: List[StoryPart] = []

        if sentence_mode and len(units) <= len(queue):
            # Too few sentences for spacing, pair each sentence with one image
            for unit in units:
                new_parts.append(TextPart(content=unit))
                new_parts.append(queue.pop(0))
            new_parts.extend(queue)
            logger.debug("images_alternated", units=len(units), images=len(images))
            return new_parts

        placed_count = len(queue) if sentence_mode else min(len(queue), self.config.max_quantile_images)
        positions = set(self.compute_positions(placed_count, len(units)))

        for i, unit in enumerate(units):
            new_parts.append(TextPart(content=unit))
            if i in positions and queue:
                new_parts.append(queue.pop(0))
        new_parts.extend(queue)

        logger.debug(
            "images_repositioned",
            mode="sentence" if sentence_mode else "paragraph",
            units=len(units),
            images=len(images),
            positions=sorted(positions),
        )
        return new_parts

    def arrange(self, parts: Sequence[StoryPart], images: Sequence[StoryImage]) -> List[StoryPart]:
        """Return `parts` unchanged when the images are well distributed, a repositioned copy otherwise."""
        if self.is_properly_distributed(parts):
            return list(parts)
        return self.reposition(parts, images)
