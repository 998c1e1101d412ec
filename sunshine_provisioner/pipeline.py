from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Protocol, Sequence

from .context import ProvisionCtx
from .errors import StageFailure
from .state import ensure_defaults, mark_step_completed

logger = logging.getLogger(__name__)


class Step(Protocol):
    """A single step of the provisioning sequence."""

    step_id: str
    title: str

    def run(self, ctx: ProvisionCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        ...


@dataclass(frozen=True)
class PipelineResult:
    state: Dict[str, Any]
    ran_steps: List[str]


def run_pipeline(
    *,
    ctx: ProvisionCtx,
    state: Dict[str, Any],
    steps: Sequence[Step],
) -> PipelineResult:
    """Run steps in order; the first failure stops the whole sequence.

    Nothing is rolled back. The failing step id lands in
    state['execution']['failed_step'] and on the raised StageFailure.
    """

    state = ensure_defaults(state)
    ran: List[str] = []

    for step in steps:
        state["execution"]["current_step"] = step.step_id
        logger.info("Running step %s (%s)", step.step_id, step.title)

        try:
            state = step.run(ctx, state)
        except Exception as e:
            state["execution"]["failed_step"] = step.step_id
            state["execution"]["errors"].append({"step": step.step_id, "error": str(e)})
            logger.error("Step %s failed: %s", step.step_id, e)
            raise StageFailure(step.step_id, e) from e

        mark_step_completed(state, step.step_id)
        ran.append(step.step_id)
        logger.info("Step %s completed", step.step_id)

    state["execution"]["current_step"] = None
    return PipelineResult(state=state, ran_steps=ran)
