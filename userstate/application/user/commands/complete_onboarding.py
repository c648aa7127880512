"""Complete onboarding command."""

from dataclasses import dataclass

from userstate.domain.user.ports import UserDataRepository


@dataclass
class CompleteOnboardingCommand:
    """Command marking onboarding as completed.

    Examples:
        >>> command = CompleteOnboardingCommand(repository)
        >>> await command.execute()
    """

    repository: UserDataRepository

    async def execute(self) -> None:
        """Execute complete onboarding command.

        Raises:
            StorageError: If the durable write fails
        """
        await self.repository.set_onboarding_complete(True)
