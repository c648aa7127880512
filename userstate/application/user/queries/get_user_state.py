"""Get user state query."""

from dataclasses import dataclass

from userstate.domain.shared.live_stream import LiveStream
from userstate.domain.user.models import UserState
from userstate.domain.user.ports import UserDataRepository


@dataclass
class GetUserStateQuery:
    """Query returning the live UserState stream.

    Identity operation over the repository, for callers that should not
    depend on the repository type directly.

    Examples:
        >>> query = GetUserStateQuery(repository)
        >>> stream = query.execute()
        >>> state = await stream.first()
    """

    repository: UserDataRepository

    def execute(self) -> LiveStream[UserState]:
        return self.repository.user_state
