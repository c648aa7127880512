"""User state queries."""

from userstate.application.user.queries.get_user_state import GetUserStateQuery

__all__ = [
    "GetUserStateQuery",
]
