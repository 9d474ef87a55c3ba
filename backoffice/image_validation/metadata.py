import io

from PIL import Image, UnidentifiedImageError

from backoffice.image_validation.types import ImageFile, ImageMetadata


class MetadataError(ValueError):
    pass


def read_metadata(file: ImageFile) -> ImageMetadata:
    try:
        with Image.open(io.BytesIO(file.data)) as img:
            width, height = img.size
            mime = Image.MIME.get(img.format, file.type)
    except (UnidentifiedImageError, OSError) as e:
        raise MetadataError(f"Cannot read image {file.name}") from e
    return ImageMetadata(width=width, height=height, size=file.size, type=mime)


def aspect_ratio(width, height):
    return width / height


def aspect_ratio_in_range(actual, target, tolerance=0.05):
    return abs(actual - target) <= target * tolerance


def format_file_size(size):
    if size == 0:
        return "0 Bytes"
    units = ["Bytes", "KB", "MB", "GB"]
    i = 0
    while size >= 1024 ** (i + 1) and i < len(units) - 1:
        i += 1
    return f"{round(size / 1024 ** i, 2):g} {units[i]}"
