from __future__ import annotations

from typing import Any, Dict

# Run state lives in memory only; every invocation rebuilds it from scratch.


def new_state() -> Dict[str, Any]:
    return ensure_defaults({})


def ensure_defaults(state: Dict[str, Any]) -> Dict[str, Any]:
    """Fill required keys with sane defaults (without overriding values)."""

    state.setdefault("decisions", {})
    state.setdefault("execution", {})

    exe = state["execution"]
    exe.setdefault("current_step", None)
    exe.setdefault("completed_steps", [])
    exe.setdefault("failed_step", None)
    exe.setdefault("errors", [])

    return state


def record_decision(state: Dict[str, Any], key: str, value: Any) -> None:
    state.setdefault("decisions", {})[key] = value


def mark_step_completed(state: Dict[str, Any], step_id: str) -> None:
    exe = state.setdefault("execution", {})
    completed = exe.setdefault("completed_steps", [])
    if step_id not in completed:
        completed.append(step_id)
