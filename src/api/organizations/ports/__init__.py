"""Ports (interfaces) for the organizations bounded context."""

from organizations.ports.exceptions import OrganizationNotFoundError
from organizations.ports.repositories import IOrganizationRepository

__all__ = [
    "IOrganizationRepository",
    "OrganizationNotFoundError",
]
