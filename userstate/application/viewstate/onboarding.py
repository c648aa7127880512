"""Onboarding pager view-model."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Tuple

import structlog

from userstate.application.user.commands.complete_onboarding import CompleteOnboardingCommand
from userstate.domain.shared.live_stream import LiveStream

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class OnboardingStepData:
    title: str
    description: str


DEFAULT_STEPS: Tuple[OnboardingStepData, ...] = (
    OnboardingStepData(
        title="Welcome to MyApp",
        description="Discover amazing features that will help you achieve your goals.",
    ),
    OnboardingStepData(
        title="Stay Organized",
        description="Keep track of everything important with our intuitive interface.",
    ),
    OnboardingStepData(
        title="Get Started",
        description="You're all set! Let's begin your journey.",
    ),
)


@dataclass(frozen=True)
class OnboardingUiState:
    """Pager position over the onboarding steps.

    Local to the onboarding screen; not persisted.
    """

    current_step: int = 0
    steps: Tuple[OnboardingStepData, ...] = field(default=DEFAULT_STEPS)

    @property
    def total_steps(self) -> int:
        return len(self.steps)

    @property
    def is_first_step(self) -> bool:
        return self.current_step == 0

    @property
    def is_last_step(self) -> bool:
        return self.current_step == self.total_steps - 1

    @property
    def current_step_data(self) -> OnboardingStepData:
        return self.steps[self.current_step]


class OnboardingViewModel:
    """
    Onboarding screen.

    Step navigation is clamped to the step range. Completing onboarding goes
    through CompleteOnboardingCommand; the router reacts to the persisted
    flag, not to this view-model.
    """

    def __init__(
        self,
        complete_onboarding: CompleteOnboardingCommand,
        steps: Tuple[OnboardingStepData, ...] = DEFAULT_STEPS,
    ) -> None:
        if not steps:
            raise ValueError("Onboarding needs at least one step")
        self._complete_onboarding = complete_onboarding
        self.ui_state: LiveStream[OnboardingUiState] = LiveStream(
            OnboardingUiState(steps=tuple(steps)), name="onboarding"
        )

    @property
    def state(self) -> OnboardingUiState:
        return self.ui_state.value  # type: ignore[return-value]

    def on_next_step(self) -> None:
        current = self.state
        if current.current_step < current.total_steps - 1:
            self.ui_state.emit(replace(current, current_step=current.current_step + 1))

    def on_previous_step(self) -> None:
        current = self.state
        if current.current_step > 0:
            self.ui_state.emit(replace(current, current_step=current.current_step - 1))

    async def complete_onboarding(self) -> None:
        """Persist onboarding completion.

        Raises:
            StorageError: If the durable write fails
        """
        logger.info("Onboarding completion requested", step=self.state.current_step)
        await self._complete_onboarding.execute()
