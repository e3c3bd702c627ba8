"""Domain exceptions for IAM bounded context.

These exceptions represent domain-level errors that can occur during
repository operations. They should be caught and handled by the
application layer.
"""


class DuplicateUserEmailError(Exception):
    """Raised when a user with the same email address is already stored.

    Repositories raise this when the unique index on email rejects an
    insert, which covers two registrations racing past the existence check.
    """

    pass
