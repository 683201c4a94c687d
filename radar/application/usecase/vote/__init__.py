"""Vote use cases."""

from .vote_content import VoteContentRequest, VoteContentResponse, VoteContentUseCase

__all__ = [
    "VoteContentRequest",
    "VoteContentResponse",
    "VoteContentUseCase",
]
