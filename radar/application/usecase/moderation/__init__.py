"""Moderation use cases."""

from .moderate_content import (
    ContentStateResponse,
    DeleteContentRequest,
    DeleteContentUseCase,
    FeatureContentRequest,
    FeatureContentUseCase,
)
from .report_content import (
    ReportContentRequest,
    ReportContentResponse,
    ReportContentUseCase,
)

__all__ = [
    "ContentStateResponse",
    "DeleteContentRequest",
    "DeleteContentUseCase",
    "FeatureContentRequest",
    "FeatureContentUseCase",
    "ReportContentRequest",
    "ReportContentResponse",
    "ReportContentUseCase",
]
