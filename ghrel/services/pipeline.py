"""Ordered task pipeline.

Each externally invokable operation is a named task that declares the tasks
it requires. Running a task first runs its requirements, dependency-first,
each exactly once, and stops at the first failure.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass

from ghrel.core.result import Err, Ok, Result
from ghrel.release.errors import InvalidInput, ReleaseError

PRE_CHECKS = "publish-pre-checks"
BUILD = "build"
CREATE_RELEASE_BRANCH = "create-release-branch"
PUBLISH = "publish"


@dataclass(frozen=True, slots=True)
class Task:
    name: str
    requires: tuple[str, ...] = ()
    description: str = ""


TASKS: Mapping[str, Task] = {
    t.name: t
    for t in (
        Task(PRE_CHECKS, description="check branch and working tree policy"),
        Task(BUILD, description="resolve the build artifact"),
        Task(
            CREATE_RELEASE_BRANCH,
            requires=(PRE_CHECKS,),
            description="create releases/<version> at HEAD",
        ),
        Task(
            PUBLISH,
            requires=(PRE_CHECKS, BUILD),
            description="create the GitHub release, upload, tag and push",
        ),
    )
}

TaskHandler = Callable[[], Result[None, ReleaseError]]


def plan(
    target: str,
    tasks: Mapping[str, Task] = TASKS,
) -> Result[tuple[str, ...], InvalidInput]:
    """Dependency-first execution order for ``target``.

    Requirements run in declaration order. Unknown tasks and cycles are
    reported as InvalidInput.
    """
    order: list[str] = []
    visiting: list[str] = []

    def visit(name: str) -> InvalidInput | None:
        if name in order:
            return None
        if name in visiting:
            cycle = " -> ".join([*visiting[visiting.index(name) :], name])
            return InvalidInput(message=f"task dependency cycle: {cycle}")
        task = tasks.get(name)
        if task is None:
            return InvalidInput(
                message=f"unknown task: {name}",
                hint=f"Known tasks: {', '.join(sorted(tasks))}",
            )

        visiting.append(name)
        for dep in task.requires:
            error = visit(dep)
            if error is not None:
                return error
        visiting.pop()
        order.append(name)
        return None

    error = visit(target)
    if error is not None:
        return Err(error)
    return Ok(tuple(order))


def run_pipeline(
    target: str,
    handlers: Mapping[str, TaskHandler],
    tasks: Mapping[str, Task] = TASKS,
) -> Result[tuple[str, ...], ReleaseError]:
    """Run ``target`` and its requirements.

    Returns:
        Ok(names of the tasks that ran), or the first task's error
    """
    order = plan(target, tasks)
    if isinstance(order, Err):
        return order

    for name in order.value:
        handler = handlers.get(name)
        if handler is None:
            return Err(InvalidInput(message=f"no handler registered for task: {name}"))
        outcome = handler()
        if isinstance(outcome, Err):
            return outcome

    return Ok(order.value)
