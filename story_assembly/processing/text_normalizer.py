import re

from story_assembly.languages.language_profile import LanguageProfile

_EXTRA_NEWLINES = re.compile(r'\n{3,}')


class TextNormalizer:
    """
    Removes the conversational sentences a model puts before a story and tidies whitespace.

    Normalizing is idempotent: running it on its own output returns the same text.

    Args:
        profile (LanguageProfile): Language whose preamble patterns are stripped.
    """

    def __init__(self, profile: LanguageProfile):
        self.profile = profile

    def strip_preambles(self, text: str) -> str:
        """Remove every known preamble sentence found at the start of the text."""
        text = text.lstrip()
        stripped = True
        while stripped and text:
            stripped = False
            for pattern in self.profile.compiled_preambles:
                match = pattern.match(text)
                if match:
                    text = text[match.end():].lstrip()
                    stripped = True
                    break
        return text

    @staticmethod
    def collapse_newlines(text: str) -> str:
        return _EXTRA_NEWLINES.sub('\n\n', text)

    def normalize(self, text: str) -> str:
        """
        Strip preambles, collapse runs of 3+ newlines to a blank line and trim the text.

        Args:
            text: Raw generated text

        Returns:
            The cleaned text, or the trimmed input if no preamble matched
        """
        text = self.strip_preambles(text)
        text = self.collapse_newlines(text)
        return text.strip()
