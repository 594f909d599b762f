"""Domain exceptions for the organizations bounded context."""


class OrganizationNotFoundError(Exception):
    """Raised when an organization is missing or belongs to another tenant."""

    pass
