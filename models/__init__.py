# Models package
# Re-export response schemas and request-scoped split types
from models.schemas import (
    ErrorResponse,
    HealthResponse,
    SplitInfoResponse,
)
from models.split import (
    InboundPart,
    OutboundField,
    OutboundFile,
    OutboundPayload,
    SplitResult,
    SplitError,
    SplitErrorKind,
)

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "SplitInfoResponse",
    "InboundPart",
    "OutboundField",
    "OutboundFile",
    "OutboundPayload",
    "SplitResult",
    "SplitError",
    "SplitErrorKind",
]
