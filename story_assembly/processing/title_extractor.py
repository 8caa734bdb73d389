from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional

from story_assembly.languages.language_profile import LanguageProfile

TITLE_MARKER = "**"


@dataclass(frozen=True)
class ExtractedStory:
    title: str
    body: str


class TitleExtractor:
    """
    Finds the title of a generated story and removes its duplicates from the body.

    The title is looked up in this order:
        1. A line fully wrapped in ** markers (the format the model is asked for).
        2. The first sentence of the first substantial line, or the line itself, shortened to 50 characters.
        3. A generic title with the current date and time.

    Duplicate removal is exact, case-sensitive text comparison. It is a best-effort cleanup,
    not a guarantee for every phrasing a model might produce.

    Args:
        profile (LanguageProfile): Language used for the generic title.
        clock (Callable[[], datetime]): Source of the current time for the generic title.
        min_line_length (int): Lines must be longer than this to be used as a fallback title.
        max_title_length (int): Fallback titles longer than this are cut and end with an ellipsis.
    """

    def __init__(
            self,
            profile: LanguageProfile,
            clock: Callable[[], datetime] = datetime.now,
            min_line_length: int = 10,
            max_title_length: int = 50,
    ):
        self.profile = profile
        self.clock = clock
        self.min_line_length = min_line_length
        self.max_title_length = max_title_length

    @staticmethod
    def _is_marked_title(line: str) -> bool:
        return line.startswith(TITLE_MARKER) and line.endswith(TITLE_MARKER) and len(line) > 2 * len(TITLE_MARKER)

    @staticmethod
    def _lines(text: str) -> List[str]:
        return text.splitlines()

    def _marked_title(self, lines: List[str]) -> Optional[str]:
        for line in lines:
            trimmed = line.strip()
            if self._is_marked_title(trimmed):
                return trimmed[len(TITLE_MARKER):-len(TITLE_MARKER)].strip()
        return None

    def _first_line_title(self, lines: List[str]) -> Optional[str]:
        for line in lines:
            trimmed = line.strip()
            if len(trimmed) <= self.min_line_length or trimmed.startswith(TITLE_MARKER):
                continue

            sentence_end = trimmed.find('.')
            if sentence_end != -1:
                sentence = trimmed[:sentence_end]
                if len(sentence) > self.min_line_length:
                    return sentence

            if len(trimmed) > self.max_title_length:
                return trimmed[:self.max_title_length] + "..."
            return trimmed
        return None

    def generic_title(self) -> str:
        return f"{self.profile.fallback_title_prefix} {self.clock().strftime('%Y-%m-%d %H:%M')}"

    def extract_title(self, text: str) -> str:
        """Return the story title, falling back to a generic dated title."""
        lines = self._lines(text)
        title = self._marked_title(lines)
        if title is None:
            title = self._first_line_title(lines)
        if title is None:
            title = self.generic_title()
        return title

    def clean_body(self, text: str, title: str) -> str:
        """
        Remove the title line and repeated titles from the story text.

        Marker-wrapped lines and lines equal to the title are dropped, blank lines directly
        after them are dropped too, and a line that starts with the title keeps only what follows it.
        """
        cleaned_lines = []
        after_title = False

        for line in self._lines(text):
            trimmed = line.strip()

            if trimmed.startswith(TITLE_MARKER) and trimmed.endswith(TITLE_MARKER):
                after_title = True
                continue

            if after_title and not trimmed:
                continue

            if title and trimmed == title:
                after_title = True
                continue

            if title and trimmed.startswith(title) and len(trimmed) > len(title):
                remainder = trimmed[len(title):].strip()
                if remainder:
                    cleaned_lines.append(remainder)
                after_title = True
                continue

            after_title = False
            cleaned_lines.append(line)

        return "\n".join(cleaned_lines).strip()

    def extract(self, text: str) -> ExtractedStory:
        title = self.extract_title(text)
        return ExtractedStory(title=title, body=self.clean_body(text, title))
