from typing import Dict

from pydantic import ValidationError


class BackofficeError(Exception):
    pass


class UnknownEndpoint(BackofficeError, AttributeError):
    pass


class ContractValidationError(BackofficeError):
    """Raised before any request is built when a query or body does not match its endpoint."""

    def __init__(self, endpoint: str, part: str, error: ValidationError):
        self.endpoint = endpoint
        self.part = part
        self.error = error
        super().__init__(f"{endpoint}: invalid {part}: {error}")

    @property
    def field_errors(self) -> Dict[str, str]:
        return {
            ".".join(str(p) for p in e["loc"]): e["msg"]
            for e in self.error.errors()
        }
