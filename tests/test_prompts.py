import pytest

from story_assembly.errors import UnsupportedLanguageError
from story_assembly.prompts.story_prompt_builder import StoryPromptBuilder
from story_assembly.prompts.story_request import StoryRequest


@pytest.fixture
def request_params():
    return StoryRequest(
        age_group="Toddler",
        story_length="short",
        characters=["Luna the rabbit", "an owl"],
        setting="a glowing forest",
        moral_message="kindness",
    )


def test_length_words(english):
    builder = StoryPromptBuilder(english)
    assert builder.length_words("SHORT") == "300-400 words"
    assert builder.length_words("long") == "900-1000 words"
    assert builder.length_words("epic") == "600-700 words"


def test_age_instructions(english):
    builder = StoryPromptBuilder(english)
    assert "ages 3-5" in builder.age_instructions("preschool")
    assert builder.age_instructions("teen") == english.default_age_instruction


def test_prompt_contents(english, request_params):
    prompt = StoryPromptBuilder(english).build_prompt(request_params)

    assert prompt.startswith(english.language_instruction)
    assert "Luna the rabbit, an owl" in prompt
    assert "'Luna the rabbit'" in prompt
    assert "a glowing forest" in prompt
    assert "300-400 words" in prompt
    assert "ages 1-3" in prompt
    assert "[Image: brief description]" in prompt
    assert '"The End."' in prompt


def test_text_only_prompt_has_no_image_instructions(english, request_params):
    request_params.with_images = False
    assert "[Image:" not in StoryPromptBuilder(english).build_prompt(request_params)


def test_spanish_prompt(spanish, request_params):
    request_params.characters = []
    prompt = StoryPromptBuilder(spanish).build_prompt(request_params)

    assert "ESPAÑOL" in prompt
    assert "'un niño'" in prompt
    assert '"Fin."' in prompt
    assert "300-400 palabras" in prompt


def test_generation_body(english, request_params):
    body = StoryPromptBuilder(english).build_generation_body(request_params)

    config = body["generationConfig"]
    assert config["responseModalities"] == ["TEXT", "IMAGE"]
    assert config["maxOutputTokens"] == 2000
    assert config["temperature"] == 0.8
    assert config["topK"] == 40
    assert body["contents"][0]["parts"][0]["text"].startswith("CRITICAL REQUIREMENT")

    request_params.with_images = False
    assert StoryPromptBuilder(english).build_generation_body(request_params)["generationConfig"]["responseModalities"] == ["TEXT"]


def test_invalid_max_tokens():
    with pytest.raises(ValueError):
        StoryRequest(age_group="toddler", story_length="short", max_tokens=0)


def test_request_language_picks_the_profile(request_params):
    request_params.language = "Spanish"
    prompt = StoryPromptBuilder().build_prompt(request_params)

    assert "ESPAÑOL" in prompt
    assert "300-400 palabras" in prompt
    assert '"Fin."' in prompt


def test_builder_without_profile_defaults_to_english(request_params):
    builder = StoryPromptBuilder()

    assert builder.length_words("short") == "300-400 words"
    assert '"The End."' in builder.build_prompt(request_params)


def test_unknown_request_language(request_params):
    request_params.language = "klingon"
    with pytest.raises(UnsupportedLanguageError):
        StoryPromptBuilder().build_prompt(request_params)
