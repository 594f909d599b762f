"""Capability-based authorization shared by every bounded context.

Roles carry (action, subject) permissions, principals get an Ability built
from their role, and routes declare policies evaluated against it.
"""

from shared_kernel.authorization.ability import Ability, AbilityFactory
from shared_kernel.authorization.policies import (
    Policy,
    PolicyEvaluator,
    any_of,
    can,
    can_any_or_own,
)
from shared_kernel.authorization.types import (
    Action,
    Grant,
    Subject,
    format_permission_name,
)

__all__ = [
    "Ability",
    "AbilityFactory",
    "Action",
    "Grant",
    "Policy",
    "PolicyEvaluator",
    "Subject",
    "any_of",
    "can",
    "can_any_or_own",
    "format_permission_name",
]
