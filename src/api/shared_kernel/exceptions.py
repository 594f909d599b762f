"""Cross-context error taxonomy for tenant isolation and authorization.

Every error is raised at the point of detection and propagates unhandled
to the request boundary, which maps it to an external outcome. Nothing in
the core retries or swallows these errors.
"""


class UnauthenticatedError(Exception):
    """Raised when the caller cannot be authenticated.

    Covers a missing, malformed, expired or badly signed credential, and a
    credential whose user no longer exists. Surfaced as 401.
    """

    pass


class PrincipalMissingError(UnauthenticatedError):
    """Raised when a tenant-scoped step runs with no principal attached.

    The tenant scope filter installer requires the principal resolver to
    have run first on the same request.
    """

    pass


class MissingTenantContextError(Exception):
    """Raised when tenant context is required but absent.

    This is an internal invariant violation (a wiring defect upstream),
    never a user input error. Surfaced as 500 and logged distinctly.
    """

    pass


class TenantContextAlreadyBoundError(MissingTenantContextError):
    """Raised when a request tries to bind a second, different tenant."""

    pass


class ForbiddenError(Exception):
    """Raised when policy evaluation denies an operation. Surfaced as 403."""

    pass


class DuplicateConstraintError(Exception):
    """Raised when a uniqueness rule is violated at persistence time.

    Attributes:
        field: Name of the offending field (username, email, domain, name).
    """

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field
