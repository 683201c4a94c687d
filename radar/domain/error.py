"""Domain layer errors.

These are the expected, caller-recoverable outcomes of engagement operations.
The interface layer maps each kind to a response status; anything outside
this hierarchy is treated as an internal failure.
"""


class DomainError(Exception):
    """Base domain error."""

    kind: str = "domain_error"


class ValidationError(DomainError):
    """Malformed input."""

    kind = "validation_error"


class InvalidOptionError(ValidationError):
    """Poll option does not belong to the poll being voted on."""

    kind = "invalid_option"

    def __init__(self, option_id: str, poll_id: str):
        self.option_id = option_id
        self.poll_id = poll_id
        super().__init__(f"Option {option_id} does not belong to poll {poll_id}")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    kind = "not_found"

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class DuplicateVoteError(DomainError):
    """The voter already has a vote recorded on this target."""

    kind = "duplicate_vote"

    def __init__(self, target: str, target_id: str):
        self.target = target
        self.target_id = target_id
        super().__init__(f"You have already voted on this {target}")


class PollClosedError(DomainError):
    """Poll is closed or past its expiry."""

    kind = "poll_closed"

    def __init__(self, poll_id: str):
        self.poll_id = poll_id
        super().__init__(f"Poll {poll_id} is not accepting votes")


class AuthorizationError(DomainError):
    """Requester lacks the ownership or role needed for the operation."""

    kind = "forbidden"


class AuthenticationRequiredError(DomainError):
    """Operation needs a registered user but the caller is anonymous."""

    kind = "authentication_required"
