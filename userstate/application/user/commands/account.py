"""Account commands: identity, authentication flag and logout."""

from dataclasses import dataclass

from userstate.domain.user.ports import UserDataRepository


@dataclass
class SaveUserInfoCommand:
    """Command storing the user identity.

    user_id, user_name and email are always written together.

    Examples:
        >>> command = SaveUserInfoCommand(repository)
        >>> await command.execute("u1", "Ann", "a@x.com")
    """

    repository: UserDataRepository

    async def execute(self, user_id: str, user_name: str, email: str) -> None:
        await self.repository.set_user_info(user_id, user_name, email)


@dataclass
class SetAuthenticatedCommand:
    """Command recording whether the user is signed in."""

    repository: UserDataRepository

    async def execute(self, authenticated: bool) -> None:
        await self.repository.set_authenticated(authenticated)


@dataclass
class LogOutCommand:
    """Command resetting all user data to defaults.

    The router observes the reset and returns to the onboarding flow.
    """

    repository: UserDataRepository

    async def execute(self) -> None:
        """Execute logout.

        Raises:
            StorageError: If the durable write fails
        """
        await self.repository.clear()
