import re
from typing import Dict, List, Pattern


class LanguageProfile:
    """
    Language-dependent vocabulary used when cleaning and prompting for stories.

    Subclasses fill in the class attributes and register themselves with
    `LanguageRegistry.register_language`.

    Attributes:
        preamble_patterns: Regular expressions, each matching one whole conversational
            sentence the model tends to put before the story ("Here's a story about...").
            They are matched case-insensitively at the start of the text.
        fallback_title_prefix: First word of the generic title used when no title can be found.
        closing_line: The line the story is asked to end with.
        illustration_alt_text: Alt text prefix for images without an [Image: ...] marker.
    """
    name: str = ""
    preamble_patterns: List[str] = []
    fallback_title_prefix: str = "Story"
    closing_line: str = "The End."
    illustration_alt_text: str = "Story illustration"

    # Prompt vocabulary
    language_instruction: str = ""
    length_words: Dict[str, str] = {}
    default_length: str = "medium"
    age_instructions: Dict[str, str] = {}
    default_age_instruction: str = ""
    default_main_character: str = ""
    user_message: str = ""
    prompt_template: str = ""
    illustration_instructions: str = ""

    def __init__(self):
        self._compiled_preambles = [re.compile(pattern, re.IGNORECASE) for pattern in self.preamble_patterns]

    @property
    def compiled_preambles(self) -> List[Pattern]:
        return self._compiled_preambles

    def __repr__(self):
        return f"{self.__class__.__name__}(name={self.name!r})"
