"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class InvalidArgumentError(DomainError):
    """A caller supplied a value outside the accepted domain.

    Examples: a vote value other than +1/-1, an unknown item kind,
    a reply whose parent belongs to another post.
    """

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ConflictError(DomainError):
    """Raised when a create would violate a uniqueness rule."""

    pass


class VoteFailedError(DomainError):
    """A vote could not be recorded because of a store failure.

    Nothing was written. Re-sending the same vote is safe.
    """

    def __init__(self, message: str = "Failed to process vote"):
        super().__init__(message)


class AssemblyInputInvalidError(DomainError):
    """Comment records form a parent cycle and strict assembly was requested."""

    def __init__(self, comment_ids: list[int]):
        self.comment_ids = comment_ids
        super().__init__(
            f"Comment parent cycle detected: {', '.join(str(i) for i in comment_ids)}"
        )


class StoreError(DomainError):
    """Raised by persistence adapters when the backing store fails."""

    pass


class TransactionConflictError(StoreError):
    """The store aborted a transaction that may succeed if re-run.

    Serialization failures and deadlock victims.
    """

    pass
