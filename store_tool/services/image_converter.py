"""Icon to image conversion"""

import logging
from pathlib import Path
from typing import Union

from PIL import Image

from ..utils.async_utils import sync_to_async


class ImageConverter:
    """Converts application icons into PNG logos"""

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    async def convert_icon_to_image(self,
                                    source_path: Union[str, Path],
                                    destination_path: Union[str, Path]) -> bool:
        """
        Convert an icon file to PNG

        Args:
            source_path: Icon file (any format Pillow reads, usually .ico)
            destination_path: PNG file to write

        Returns:
            True if the image was written
        """
        try:
            await _convert(Path(source_path), Path(destination_path))
            return True
        except Exception as e:
            self.logger.critical(f"Failed to convert {source_path} to PNG: {e}")
            return False


@sync_to_async
def _convert(source_path: Path, destination_path: Path) -> None:
    # Pillow opens the largest frame of a multi-size .ico
    with Image.open(source_path) as image:
        image.save(destination_path, format="PNG")
