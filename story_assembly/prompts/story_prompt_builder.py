from story_assembly.languages.language_profile import LanguageProfile
from story_assembly.languages.language_registry import LanguageRegistry
from story_assembly.prompts.story_request import DEFAULT_LANGUAGE, StoryRequest


class StoryPromptBuilder:
    """
    Builds the story-writing prompt and the generateContent request body for a StoryRequest.

    Args:
        profile (LanguageProfile): Language every story is written in. When omitted, each
            request is written in the language named by its `language` field.
        temperature (float): Sampling temperature sent with the request.
        top_k (int): Top-k sampling parameter.
        top_p (float): Nucleus sampling parameter.
    """

    def __init__(self, profile: LanguageProfile = None, temperature: float = 0.8, top_k: int = 40, top_p: float = 0.9):
        self.profile = profile
        self.temperature = temperature
        self.top_k = top_k
        self.top_p = top_p

    def profile_for(self, language: str = DEFAULT_LANGUAGE) -> LanguageProfile:
        """The builder's own profile, or the registered one for `language` when it has none."""
        if self.profile is not None:
            return self.profile
        return LanguageRegistry.get_language(language)

    def length_words(self, story_length: str, language: str = DEFAULT_LANGUAGE) -> str:
        """Target word range for a story length, unknown lengths use the medium range."""
        profile = self.profile_for(language)
        words = profile.length_words
        return words.get(story_length.lower(), words[profile.default_length])

    def age_instructions(self, age_group: str, language: str = DEFAULT_LANGUAGE) -> str:
        profile = self.profile_for(language)
        return profile.age_instructions.get(age_group.lower(), profile.default_age_instruction)

    def build_prompt(self, request: StoryRequest) -> str:
        profile = self.profile_for(request.language)
        main_character = request.characters[0] if request.characters else profile.default_main_character
        return profile.prompt_template.format(
            language_instruction=profile.language_instruction,
            characters=", ".join(request.characters) or main_character,
            main_character=main_character,
            setting=request.setting,
            moral_message=request.moral_message,
            age_instructions=self.age_instructions(request.age_group, request.language),
            length_words=self.length_words(request.story_length, request.language),
            illustrations=profile.illustration_instructions if request.with_images else "",
            closing_line=profile.closing_line,
        )

    def build_generation_body(self, request: StoryRequest) -> dict:
        """
        Request body for a generateContent call. Images are requested only when `with_images` is set.
        """
        modalities = ["TEXT", "IMAGE"] if request.with_images else ["TEXT"]
        return {
            "contents": [
                {
                    "parts": [
                        {"text": self.build_prompt(request)}
                    ]
                }
            ],
            "generationConfig": {
                "temperature": self.temperature,
                "topK": self.top_k,
                "topP": self.top_p,
                "maxOutputTokens": request.max_tokens,
                "responseMimeType": "text/plain",
                "responseModalities": modalities
            }
        }
