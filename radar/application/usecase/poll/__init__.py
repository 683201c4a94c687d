"""Poll use cases."""

from .close_poll import ClosePollRequest, ClosePollResponse, ClosePollUseCase
from .create_poll import CreatePollRequest, CreatePollUseCase
from .get_poll import GetPollRequest, GetPollUseCase, PollOptionResponse, PollResponse
from .get_poll_results import (
    GetPollResultsRequest,
    GetPollResultsUseCase,
    OptionResultResponse,
    PollResultsResponse,
)
from .list_polls import ListPollsRequest, ListPollsResponse, ListPollsUseCase
from .vote_poll import VotePollRequest, VotePollResponse, VotePollUseCase

__all__ = [
    "ClosePollRequest",
    "ClosePollResponse",
    "ClosePollUseCase",
    "CreatePollRequest",
    "CreatePollUseCase",
    "GetPollRequest",
    "GetPollUseCase",
    "PollOptionResponse",
    "PollResponse",
    "GetPollResultsRequest",
    "GetPollResultsUseCase",
    "OptionResultResponse",
    "PollResultsResponse",
    "ListPollsRequest",
    "ListPollsResponse",
    "ListPollsUseCase",
    "VotePollRequest",
    "VotePollResponse",
    "VotePollUseCase",
]
