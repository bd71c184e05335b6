"""Release services.

Services implement the release workflow on top of the domain types in
``ghrel.release`` and the git and HTTP adapters.
"""

from ghrel.services.artifact import resolve_artifact
from ghrel.services.branch import create_release_branch, release_branch_name
from ghrel.services.pipeline import TASKS, Task, plan, run_pipeline
from ghrel.services.preflight import validate
from ghrel.services.publish import publish

__all__ = [
    "TASKS",
    "Task",
    "create_release_branch",
    "plan",
    "publish",
    "release_branch_name",
    "resolve_artifact",
    "run_pipeline",
    "validate",
]
