from backoffice.image_validation.manager import ValidationManager
from backoffice.image_validation.presets import (
    banner_manager,
    desktop_banner_manager,
    general_image_manager,
    mobile_banner_manager,
)
from backoffice.image_validation.types import ImageFile, ImageMetadata, Rule, ValidationResult
