from concurrent.futures import ThreadPoolExecutor

import pytest

from story_assembly.config.assembly_config import AssemblyConfig
from story_assembly.errors import ResponseFormatError
from story_assembly.models.structured_story.story_part import TextPart, ImagePart
from story_assembly.models.structured_story.story_result import StoryResult
from story_assembly.pipeline.story_assembler import StoryAssembler
from tests.conftest import image_part, make_png, make_response, text_part

CLUSTERED_STORY = (
    "Sure! Here's a bedtime story about a brave fox.\n\n"
    "**The Brave Fox**\n\n"
    "Once upon a time, a fox lived by the river.\n\n"
    "One night the river froze.\n\n\n\n"
    "The fox found a lost owl.\n\n"
    "Together they built a fire.\n\n"
    "The owl flew home at dawn.\n\n"
    "The End."
)


@pytest.fixture
def assembler(fixed_clock):
    return StoryAssembler(AssemblyConfig(), clock=fixed_clock)


def test_clustered_images_are_spread_through_the_story(assembler, png_bytes):
    response = make_response(text_part(CLUSTERED_STORY), image_part(png_bytes), image_part(make_png((0, 0, 0))))
    story = assembler.assemble_response(response)
    parts = story.result.structured_content.parts

    assert story.title == "The Brave Fox"
    assert story.was_repositioned
    assert parts[0] == TextPart("Once upon a time, a fox lived by the river.\n\n")
    assert parts[2] == ImagePart(0, "Story illustration 1")
    assert parts[5] == ImagePart(1, "Story illustration 2")
    assert isinstance(parts[-1], TextPart)
    assert story.plain_text == (
        "Once upon a time, a fox lived by the river.\n\n"
        "One night the river froze.\n\n"
        "The fox found a lost owl.\n\n"
        "Together they built a fire.\n\n"
        "The owl flew home at dawn.\n\n"
        "The End."
    )


def test_interleaved_images_keep_model_order(assembler, png_bytes):
    response = make_response(
        text_part("**The Fox Who Slept**\n\nThe fox yawned.\n\n"),
        image_part(png_bytes),
        text_part("The fox curled up.\n\n"),
        image_part(png_bytes),
        text_part("The End."),
    )
    story = assembler.assemble_response(response)
    parts = story.result.structured_content.parts

    assert not story.was_repositioned
    assert parts == [
        TextPart("The fox yawned.\n\n"),
        ImagePart(0, "Story illustration 1"),
        TextPart("The fox curled up.\n\n"),
        ImagePart(1, "Story illustration 2"),
        TextPart("The End."),
    ]


def test_bad_image_is_dropped_without_failing(assembler, png_bytes):
    response = make_response(
        text_part(CLUSTERED_STORY),
        image_part(png_bytes),
        {"inlineData": {"data": "!!bad!!", "mimeType": "image/png"}},
    )
    content = assembler.assemble_response(response).result.structured_content

    assert len(content.images) == 1
    assert [part for part in content.parts if isinstance(part, ImagePart)] == [ImagePart(0, "Story illustration 1")]


def test_record_round_trip(assembler, png_bytes):
    story = assembler.assemble_response(make_response(text_part(CLUSTERED_STORY), image_part(png_bytes)))
    record = story.to_record()

    assert record["title"] == "The Brave Fox"
    loaded = StoryResult.from_json(record["structured_content"])
    assert loaded == story.result
    assert loaded.text == record["content"]


def test_spanish_text_story(fixed_clock):
    assembler = StoryAssembler(AssemblyConfig(language="spanish"), clock=fixed_clock)
    story = assembler.assemble_text(
        "¡Claro! Aquí tienes un cuento.\n\n**El Zorro Valiente**\n\nHabía una vez un zorro.\n\nFin."
    )

    assert story.title == "El Zorro Valiente"
    assert story.plain_text == "Había una vez un zorro.\n\nFin."
    assert story.result.images == []


def test_empty_story_gets_generic_title(assembler):
    story = assembler.assemble_text("")

    assert story.title == "Story 2025-06-06 20:30"
    assert story.plain_text == ""
    assert not story.was_repositioned


def test_malformed_response(assembler):
    with pytest.raises(ResponseFormatError):
        assembler.assemble_response({"candidates": []})


def test_concurrent_assemblies_are_independent(assembler):
    texts = [f"**Story Number {i}**\n\nThe fox counted to {i}." for i in range(8)]
    sequential = [assembler.assemble_text(text) for text in texts]

    with ThreadPoolExecutor(max_workers=4) as executor:
        concurrent = list(executor.map(assembler.assemble_text, texts))

    assert concurrent == sequential
    assert [story.title for story in concurrent] == [f"Story Number {i}" for i in range(8)]
