from backoffice.image_validation import rules
from backoffice.image_validation.manager import ValidationManager


def general_image_manager():
    """Product images and article covers: JPEG, PNG or WebP, any resolution."""
    return ValidationManager([rules.file_type_rule, rules.file_name_rule, rules.file_size_rule])


def desktop_banner_manager():
    return ValidationManager([
        rules.banner_file_type_rule,
        rules.file_name_rule,
        rules.desktop_prefix_rule,
        rules.desktop_resolution_rule,
        rules.desktop_banner_size_rule,
    ])


def mobile_banner_manager():
    return ValidationManager([
        rules.banner_file_type_rule,
        rules.file_name_rule,
        rules.mobile_prefix_rule,
        rules.mobile_resolution_rule,
        rules.mobile_banner_size_rule,
    ])


def banner_manager(kind):
    return desktop_banner_manager() if kind == "desktop" else mobile_banner_manager()
