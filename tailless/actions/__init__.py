"""Persistence actions: each validates, authorizes and returns an ApiResponse."""

from tailless.actions.auth import ANONYMOUS, AuthContext, authorize_user, sign_in, sign_out
from tailless.actions.contributors import add_contributor, remove_contributor
from tailless.actions.moments import (
    create_moment,
    delete_moment,
    get_moment,
    get_moments,
    update_moment,
)
from tailless.actions.space_moments import add_moment_to_space, remove_moment_from_space
from tailless.actions.spaces import (
    create_space,
    delete_space,
    get_space,
    get_spaces,
    update_space,
)
from tailless.actions.tags import add_tags, delete_all_tags, delete_tags
from tailless.actions.users import get_user, get_users

__all__ = [
    # Auth
    "ANONYMOUS",
    "AuthContext",
    "authorize_user",
    "sign_in",
    "sign_out",
    # Users
    "get_user",
    "get_users",
    # Spaces
    "create_space",
    "get_space",
    "get_spaces",
    "update_space",
    "delete_space",
    # Moments
    "create_moment",
    "get_moment",
    "get_moments",
    "update_moment",
    "delete_moment",
    # Membership
    "add_moment_to_space",
    "remove_moment_from_space",
    "add_contributor",
    "remove_contributor",
    "add_tags",
    "delete_tags",
    "delete_all_tags",
]
