import logging
from typing import Dict, Iterable, List, Optional

from backoffice.image_validation.metadata import MetadataError, read_metadata
from backoffice.image_validation.rules import SUPPORTED_EXTENSIONS, SUPPORTED_TYPES
from backoffice.image_validation.types import (
    WARNING,
    BatchValidationResult,
    ImageFile,
    Rule,
    ValidationContext,
    ValidationResult,
)

logger = logging.getLogger(__name__)


class ValidationManager:
    """Ordered set of image rules, run together against one file."""

    def __init__(self, rules: Iterable[Rule] = ()):
        self._rules: Dict[str, Rule] = {}
        for rule in rules:
            self.register_rule(rule)

    def register_rule(self, rule: Rule):
        if not rule.name:
            raise ValueError("Validation rule must have a name")
        self._rules[rule.name] = rule

    def unregister_rule(self, name: str):
        self._rules.pop(name, None)

    @property
    def rules(self) -> List[Rule]:
        return sorted(self._rules.values(), key=lambda r: r.priority)

    def clear_rules(self):
        self._rules = {}

    def allowed_formats(self, context: Optional[ValidationContext] = None):
        if context and context.allowed_types and context.allowed_extensions:
            return list(context.allowed_types), list(context.allowed_extensions)
        if "file-type" in self._rules:
            return list(SUPPORTED_TYPES), list(SUPPORTED_EXTENSIONS)
        return [], []

    def validate_image(self, file: ImageFile, image_type=None, allowed_types=None, allowed_extensions=None,
                       custom_rules: Iterable[Rule] = (), t=None) -> BatchValidationResult:
        try:
            metadata = read_metadata(file)
        except MetadataError as e:
            logger.warning("Failed to read image metadata: %s", e)
            metadata = None

        context = ValidationContext(image_type, allowed_types, allowed_extensions, t)
        results = []
        for rule in self.rules + list(custom_rules):
            try:
                result = rule.validate(file, metadata, context)
            except Exception as e:
                logger.exception("Image rule %s failed", rule.name)
                result = ValidationResult(False, f"Validation rule failed: {e}")
            results.append((rule.name, result))

        failed = [result for _, result in results if not result.is_valid]
        errors = [r for r in failed if r.severity != WARNING]
        warnings = [r for r in failed if r.severity == WARNING]
        return BatchValidationResult(is_valid=not errors, results=results, errors=errors, warnings=warnings)
