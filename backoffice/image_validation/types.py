import mimetypes
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple

ERROR = "error"
WARNING = "warning"


@dataclass(frozen=True)
class ImageFile:
    """An uploaded file as the browser hands it over."""
    name: str
    data: bytes
    content_type: str = ""

    @property
    def size(self):
        return len(self.data)

    @property
    def type(self):
        return self.content_type or mimetypes.guess_type(self.name)[0] or ""

    @property
    def extension(self):
        return "." + self.name.lower().rsplit(".", 1)[-1] if "." in self.name else ""


@dataclass(frozen=True)
class ImageMetadata:
    width: int
    height: int
    size: int
    type: str


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    message: Optional[str] = None
    severity: str = ERROR


VALID = ValidationResult(True)


@dataclass
class ValidationContext:
    image_type: Optional[str] = None
    allowed_types: Optional[Sequence[str]] = None
    allowed_extensions: Optional[Sequence[str]] = None
    t: Optional[Callable[..., str]] = None

    def message(self, key, fallback, **values):
        return self.t(key, **values) if self.t else fallback


@dataclass(frozen=True)
class Rule:
    name: str
    check: Callable[[ImageFile, Optional[ImageMetadata], ValidationContext], ValidationResult]
    priority: int = 10

    def validate(self, file, metadata=None, context=None):
        return self.check(file, metadata, context or ValidationContext())


@dataclass
class BatchValidationResult:
    is_valid: bool
    results: List[Tuple[str, ValidationResult]] = field(default_factory=list)
    errors: List[ValidationResult] = field(default_factory=list)
    warnings: List[ValidationResult] = field(default_factory=list)
