"""
Forward steps paired with compensating actions.

Each completed step may register an undo action; when a later step fails
the recorded compensations run newest first. A failing compensation is
reported and logged but never stops the remaining ones.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

from rexport.exporter.errors import ReconcileWarning
from rexport.logging import get_logger

logger = get_logger("rexport.exporter.saga")


@dataclass
class SagaStep:
    name: str
    compensation: Optional[Callable[[], Any]] = None


@dataclass
class CompensationReport:
    rolled_back: List[str] = field(default_factory=list)
    errors: List[ReconcileWarning] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


class Saga:
    def __init__(self, name: str):
        self.name = name
        self.completed: List[SagaStep] = []

    def run(
        self,
        name: str,
        action: Callable[[], Any],
        compensation: Optional[Callable[[Any], Any]] = None,
    ) -> Any:
        """
        Execute ``action``; on success record the step.

        ``compensation`` receives the action's result so it can undo exactly
        what was done.
        """
        result = action()
        undo = None
        if compensation is not None:
            undo = lambda: compensation(result)  # noqa: E731
        self.completed.append(SagaStep(name, undo))
        logger.debug(f"{self.name}: step '{name}' completed")
        return result

    def compensate(self) -> CompensationReport:
        """Undo completed steps in reverse order."""
        report = CompensationReport()
        for step in reversed(self.completed):
            if step.compensation is None:
                continue
            try:
                step.compensation()
                report.rolled_back.append(step.name)
                logger.info(f"{self.name}: compensated step '{step.name}'")
            except Exception as e:
                report.errors.append(ReconcileWarning(step.name, e))
                logger.warning(
                    f"{self.name}: failed to compensate step '{step.name}': {e}"
                )
        self.completed.clear()
        return report
