"""Task-type -> handler URL mapping used by the dispatcher.

The mapping is built once by the HTTP adapter and passed explicitly into
`dispatcher.execute_subtasks`; the dispatcher itself holds no URL table.
"""

import os
from types import MappingProxyType
from typing import Mapping

from dotenv import load_dotenv

from app.core.task_types import TaskType

load_dotenv()

DEFAULT_BASE_URL = os.getenv("ORCHESTRATOR_BASE_URL", "http://localhost:5000")

TASK_ROUTES = {
    TaskType.FETCH_DATA: "/fetch-salesforce-data",
    TaskType.PROCESS_DATA: "/process-data",
    TaskType.ANALYZE_DATA: "/analyze-data",
    TaskType.GENERATE_REPORT: "/generate-report",
}


def build_task_endpoints(base_url: str = DEFAULT_BASE_URL) -> Mapping[str, str]:
    """Return a read-only `{task type value: absolute URL}` mapping."""
    root = base_url.rstrip("/")
    return MappingProxyType(
        {task_type.value: f"{root}{path}" for task_type, path in TASK_ROUTES.items()}
    )
