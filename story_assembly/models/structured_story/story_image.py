import base64
import uuid
from dataclasses import dataclass, field


@dataclass(frozen=True)
class StoryImage:
    """
    An illustration extracted from a generation response.

    `index` is the position of the image among the extracted images (extraction order),
    not its render position, which is given by the ImagePart that references it.
    """
    data: bytes
    alt_text: str
    index: int
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    def to_dict(self) -> dict:
        return {
            "id": str(self.id).upper(),
            "data": base64.b64encode(self.data).decode('utf-8'),
            "altText": self.alt_text,
            "index": self.index
        }
