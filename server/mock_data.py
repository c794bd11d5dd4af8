"""Static payload served by ``GET /api/data``."""

import copy
from typing import Any, Dict, List

USERS: List[Dict[str, Any]] = [
    {"id": 1, "name": "Alice Johnson", "role": "Developer"},
    {"id": 2, "name": "Bob Smith", "role": "Designer"},
    {"id": 3, "name": "Carol Davis", "role": "Manager"},
]

PROJECTS: List[Dict[str, Any]] = [
    {"id": 1, "name": "Web App", "status": "Active"},
    {"id": 2, "name": "Mobile App", "status": "Planning"},
    {"id": 3, "name": "API Service", "status": "Completed"},
]

METRICS: Dict[str, int] = {
    "totalUsers": 150,
    "activeProjects": 8,
    "completedTasks": 342,
}


def build_dashboard_data() -> Dict[str, Any]:
    # fresh copies so a caller mutating the response cannot alter the literals
    return {
        "users": copy.deepcopy(USERS),
        "projects": copy.deepcopy(PROJECTS),
        "metrics": dict(METRICS),
    }
