import pytest

from story_assembly.processing.text_normalizer import TextNormalizer


@pytest.fixture
def normalizer(english):
    return TextNormalizer(english)


def test_strips_preamble_sentence(normalizer):
    text = "Here's a wonderful story about a fox. Once upon a time..."
    assert normalizer.normalize(text) == "Once upon a time..."


def test_strips_stacked_preambles(normalizer):
    text = "Sure! Here is a bedtime story for you:\n\n**The Fox**\n\nOnce upon a time..."
    assert normalizer.normalize(text) == "**The Fox**\n\nOnce upon a time..."


@pytest.mark.parametrize("preamble", [
    "Certainly, here is your story.",
    "Okay, here you go!",
    "I'd be happy to write that for you.",
    "HERE IS A STORY ABOUT A BRAVE LITTLE RABBIT:",
    "Of course!",
])
def test_english_preambles(normalizer, preamble):
    assert normalizer.normalize(f"{preamble}\n\nOnce upon a time.") == "Once upon a time."


def test_story_sentences_are_kept(normalizer):
    text = "Of course the fox ran away. Then it came back."
    assert normalizer.normalize(text) == text


def test_text_without_preamble_passes_through(normalizer):
    assert normalizer.normalize("  Once upon a time.\n") == "Once upon a time."


def test_collapses_extra_newlines(normalizer):
    assert normalizer.normalize("First.\n\n\n\nSecond.\n\n\nThird.") == "First.\n\nSecond.\n\nThird."


def test_empty_text(normalizer):
    assert normalizer.normalize("") == ""


def test_spanish_preambles(spanish):
    normalizer = TextNormalizer(spanish)
    text = "¡Claro! Aquí tienes un cuento sobre un zorro valiente.\n\n\n**El Zorro**\n\nHabía una vez..."
    assert normalizer.normalize(text) == "**El Zorro**\n\nHabía una vez..."


def test_spanish_profile_ignores_english_preamble(spanish):
    text = "Here's a story about a fox. Había una vez..."
    assert TextNormalizer(spanish).normalize(text) == text


@pytest.mark.parametrize("text", [
    "Here's a story about a fox.\n\n\n\nOnce upon a time.",
    "Sure! Okay, here it is: The fox slept.",
    "   \n\n\n  ",
    "The fox.\n\n\n",
])
def test_normalize_is_idempotent(normalizer, text):
    once = normalizer.normalize(text)
    assert normalizer.normalize(once) == once
