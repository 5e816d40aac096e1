import io
import logging
from typing import Dict, Optional

logger = logging.getLogger(__name__)


def decode_barcode_image(image: bytes) -> Optional[Dict[str, str]]:
    """
    Decode the first barcode found in an image.

    Returns:
        {"barcode": ..., "format": ...} or None when nothing could be read.
        Raises ValueError when the bytes are not an image.
    """
    # Imported lazily: pyzbar loads the native zbar library on import
    from PIL import Image, UnidentifiedImageError
    from pyzbar.pyzbar import decode

    try:
        img = Image.open(io.BytesIO(image))
    except UnidentifiedImageError as e:
        raise ValueError("Uploaded file is not a readable image") from e

    codes = decode(img)
    if not codes:
        # Low-contrast photos often decode once converted to grayscale
        codes = decode(img.convert("L"))
    if not codes:
        return None

    code = codes[0]
    logger.debug("Decoded %s barcode from upload", code.type)
    return {"barcode": code.data.decode("utf-8"), "format": code.type}
