import base64
import binascii
import io

from PIL import Image

from story_assembly.errors import ImageDecodeError


def decode_image_payload(encoded: str, verify: bool = True) -> bytes:
    """
    Decode a base64 inline image payload and check that it is a readable image.

    Args:
        encoded: Base64 text from an inline data part
        verify: If True, the decoded bytes must open as an image with Pillow

    Returns:
        The decoded image bytes

    Raises:
        ImageDecodeError: if the payload is not valid base64 or not a decodable image
    """
    if not isinstance(encoded, str) or not encoded:
        raise ImageDecodeError("Image payload is empty")

    try:
        data = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ImageDecodeError(f"Image payload is not valid base64: {e}") from e

    if verify:
        try:
            with Image.open(io.BytesIO(data)) as image:
                image.verify()
        except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as e:
            raise ImageDecodeError(f"Image payload could not be decoded: {e}") from e

    return data
