import re

from backoffice.image_validation.metadata import aspect_ratio, aspect_ratio_in_range, format_file_size
from backoffice.image_validation.types import VALID, Rule, ValidationResult

SUPPORTED_TYPES = ("image/jpeg", "image/png", "image/webp")
SUPPORTED_EXTENSIONS = (".jpg", ".jpeg", ".png", ".webp")

KB = 1024
MB = 1024 * KB
MIN_FILE_SIZE = 1 * KB
MAX_FILE_SIZE = 5 * MB
MAX_DESKTOP_BANNER_SIZE = 5 * MB
MAX_MOBILE_BANNER_SIZE = 3 * MB

FILE_NAME_RE = re.compile(r"^[a-zA-Z0-9_-]+$")
WIDESCREEN = 16 / 9


def _error(message):
    return ValidationResult(False, message)


def file_type_check(types, extensions):
    def check(file, metadata, context):
        allowed_types = context.allowed_types or types
        allowed_extensions = context.allowed_extensions or extensions
        listed = ", ".join(allowed_extensions)
        if file.type not in allowed_types:
            return _error(context.message("validation.image.type.unsupported",
                                          f"Unsupported file type. Please upload {listed}", extensions=listed))
        if file.extension not in allowed_extensions:
            return _error(context.message("validation.image.type.extensionMismatch",
                                          f"Unsupported extension. Expected {listed}", extensions=listed))
        return VALID
    return check


def check_file_name(file, metadata, context):
    stem = file.name.rsplit(".", 1)[0] if "." in file.name else ""
    if not FILE_NAME_RE.match(stem):
        return _error(context.message("validation.image.fileName.format",
                                      "File names may only contain letters, digits, _ and -"))
    return VALID


def file_size_check(maximum, minimum=MIN_FILE_SIZE):
    def check(file, metadata, context):
        size = metadata.size if metadata and metadata.size else file.size
        if size < minimum:
            min_size = format_file_size(minimum)
            return _error(context.message("validation.image.fileSize.tooSmall",
                                          f"File is too small, at least {min_size}", minSize=min_size))
        if size > maximum:
            max_size = format_file_size(maximum)
            return _error(context.message("validation.image.fileSize.tooLarge",
                                          f"File exceeds the {max_size} limit", maxSize=max_size))
        return VALID
    return check


def prefix_check(prefix, key):
    def check(file, metadata, context):
        if not file.name.startswith(prefix):
            return _error(context.message(key, f"File name must start with {prefix}"))
        return VALID
    return check


def resolution_check(kind, min_size, max_size):
    min_w, min_h = min_size
    max_w, max_h = max_size

    def check(file, metadata, context):
        if not metadata or not metadata.width or not metadata.height:
            return _error("Cannot read image dimensions; make sure the file is a valid image")
        width, height = metadata.width, metadata.height
        if width < min_w or height < min_h:
            return _error(context.message(f"validation.image.resolution.{kind}.tooSmall",
                                          f"Resolution below {min_w}x{min_h}",
                                          minResolution=f"{min_w}x{min_h}"))
        if width > max_w or height > max_h:
            return _error(context.message(f"validation.image.resolution.{kind}.tooLarge",
                                          f"Resolution above {max_w}x{max_h}",
                                          maxResolution=f"{max_w}x{max_h}"))
        if not aspect_ratio_in_range(aspect_ratio(width, height), WIDESCREEN, 0.05):
            return _error(context.message(f"validation.image.resolution.{kind}.aspectRatio",
                                          f"Aspect ratio must be 16:9, got {width}x{height}"))
        return VALID
    return check


file_type_rule = Rule("file-type", file_type_check(SUPPORTED_TYPES, SUPPORTED_EXTENSIONS), priority=1)
file_name_rule = Rule("filename-format", check_file_name, priority=2)
file_size_rule = Rule("file-size", file_size_check(MAX_FILE_SIZE), priority=15)

banner_file_type_rule = Rule("banner-file-type", file_type_check(("image/webp",), (".webp",)), priority=1)
desktop_prefix_rule = Rule("desktop-filename-prefix", prefix_check("d_", "validation.image.prefix.desktop"), priority=2)
mobile_prefix_rule = Rule("mobile-filename-prefix", prefix_check("m_", "validation.image.prefix.mobile"), priority=2)
desktop_resolution_rule = Rule(
    "banner-desktop-resolution", resolution_check("desktop", (1280, 720), (3840, 2160)), priority=10
)
mobile_resolution_rule = Rule(
    "banner-mobile-resolution", resolution_check("mobile", (640, 360), (1920, 1080)), priority=10
)
desktop_banner_size_rule = Rule("banner-desktop-filesize", file_size_check(MAX_DESKTOP_BANNER_SIZE), priority=15)
mobile_banner_size_rule = Rule("banner-mobile-filesize", file_size_check(MAX_MOBILE_BANNER_SIZE), priority=15)
