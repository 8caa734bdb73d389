import json

DATA_PREFIX = "data: "
DONE_MARKER = "[DONE]"


class StreamAccumulator:
    """
    Collects story text from a server-sent-events chat completion stream.

    Each `data: {...}` line contributes choices[0].delta.content to the text, `data: [DONE]`
    ends the stream. Lines that are not valid JSON are ignored. A line split across two chunks
    is kept until its end arrives.
    """

    def __init__(self):
        self._pieces = []
        self._pending = ""
        self.done = False

    @property
    def text(self) -> str:
        return "".join(self._pieces)

    def _consume_line(self, line: str):
        line = line.rstrip("\r")
        if not line.startswith(DATA_PREFIX):
            return

        payload = line[len(DATA_PREFIX):]
        if payload.strip() == DONE_MARKER:
            self.done = True
            return

        try:
            event = json.loads(payload)
            content = event["choices"][0]["delta"]["content"]
        except (json.JSONDecodeError, KeyError, IndexError, TypeError):
            return
        if isinstance(content, str):
            self._pieces.append(content)

    def feed(self, chunk: str) -> bool:
        """
        Add a chunk of the raw stream.

        Returns:
            True once the [DONE] marker has been seen
        """
        if self.done:
            return True

        lines = (self._pending + chunk).split("\n")
        self._pending = lines.pop()
        for line in lines:
            self._consume_line(line)
            if self.done:
                break
        return self.done

    def close(self) -> str:
        """Flush a last line without a trailing newline and return the accumulated text."""
        if self._pending and not self.done:
            self._consume_line(self._pending)
        self._pending = ""
        return self.text
