import json

from story_assembly.responses.stream_accumulator import StreamAccumulator


def event(content):
    return "data: " + json.dumps({"choices": [{"delta": {"content": content}}]}) + "\n"


def test_accumulates_deltas_until_done():
    accumulator = StreamAccumulator()

    assert not accumulator.feed(event("**The Fox**") + event("\n\nOnce"))
    assert accumulator.feed(event(" upon a time.") + "data: [DONE]\n")
    assert accumulator.text == "**The Fox**\n\nOnce upon a time."


def test_line_split_across_chunks():
    line = event("Hello fox")
    accumulator = StreamAccumulator()

    accumulator.feed(line[:15])
    assert accumulator.text == ""
    accumulator.feed(line[15:])
    assert accumulator.text == "Hello fox"


def test_ignores_malformed_and_unrelated_lines():
    accumulator = StreamAccumulator()
    accumulator.feed(": keep-alive\n" + "data: {not json\n" + 'data: {"choices": []}\n' + event("Fox"))

    assert accumulator.text == "Fox"


def test_nothing_is_added_after_done():
    accumulator = StreamAccumulator()
    accumulator.feed("data: [DONE]\n" + event("late"))
    accumulator.feed(event("later"))

    assert accumulator.done
    assert accumulator.text == ""


def test_close_flushes_last_line():
    accumulator = StreamAccumulator()
    accumulator.feed(event("One. ") + event("Two.").rstrip("\n"))

    assert accumulator.text == "One. "
    assert accumulator.close() == "One. Two."
