"""
Minimal saga runner.

A saga is an ordered list of steps, each with an optional compensation.
Steps run forward; when one fails, the compensations of the steps that
already completed run in reverse order and the original error is re-raised.
If a compensation itself fails, a CompensationFailureError carrying both
errors is raised instead.
"""

import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Any

from portfolio_api.core.exceptions import CompensationFailureError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SagaStep:
    """One step of a saga and the action that undoes it."""

    name: str
    action: Callable[[], Awaitable[Any]]
    compensation: Callable[[], Awaitable[Any]] | None = None


class Saga:
    """Runs saga steps forward and compensates backward on failure."""

    def __init__(self, name: str, steps: Sequence[SagaStep]):
        self.name = name
        self.steps = list(steps)

    async def run(self) -> dict[str, Any]:
        """
        Run every step in order.

        Returns:
            Each step's result keyed by step name

        Raises:
            CompensationFailureError: If a compensation failed
            Exception: The failing step's error once compensation succeeded
        """
        completed: list[SagaStep] = []
        results: dict[str, Any] = {}

        for step in self.steps:
            logger.debug(f"[{self.name}] running step '{step.name}'")
            try:
                results[step.name] = await step.action()
            except Exception as e:
                logger.warning(f"[{self.name}] step '{step.name}' failed: {e}")
                await self._compensate(completed, step, e)
                raise
            completed.append(step)

        return results

    async def _compensate(
        self,
        completed: list[SagaStep],
        failed_step: SagaStep,
        error: Exception,
    ) -> None:
        for step in reversed(completed):
            if step.compensation is None:
                continue
            try:
                await step.compensation()
            except Exception as compensation_error:
                logger.critical(
                    f"[{self.name}] compensation for '{step.name}' failed after "
                    f"'{failed_step.name}' failed. Original error: {error}. "
                    f"Compensation error: {compensation_error}"
                )
                raise CompensationFailureError(
                    failed_step.name, error, compensation_error
                ) from compensation_error
            logger.warning(f"[{self.name}] compensated step '{step.name}'")
