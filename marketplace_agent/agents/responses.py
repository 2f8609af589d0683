"""Builders for the response envelope, one per response type."""

from typing import Any, List

from marketplace_agent.errors import AgentError
from marketplace_agent.models import AgentResponse, ResponseType, Task

CATALOG_MESSAGE = (
    "Upload the marketplace template and your product data. I'll align columns "
    "automatically and give you a downloadable sheet."
)
ANALYTICS_MESSAGE = (
    "I'm ready to analyse performance once you provide daily sales or traffic data. "
    "Upload a CSV and I'll surface trends for you."
)
GENERAL_MESSAGE = (
    "I'm listening. You can ask me to set up marketplace tasks, prepare catalog "
    "sheets, or brief you on store performance."
)
ANALYTICS_METRICS = ['units_sold', 'gmv', 'returns', 'conversion_rate']


def build_task_response(tasks: List[Task]) -> AgentResponse:
    count = len(tasks)
    plural = 's' if count > 1 else ''
    return AgentResponse(
        type=ResponseType.TASK,
        message=f"I've prepared {count} task{plural} for you. Check the board to review and track progress.",
        summary='; '.join(task.title for task in tasks),
        payload={'tasks': list(tasks)},
    )


def build_catalog_response(context: Any = None) -> AgentResponse:
    return AgentResponse(
        type=ResponseType.CATALOG,
        message=CATALOG_MESSAGE,
        payload={
            'expectation': 'catalog_preparation',
            'incomingContext': context,
        },
    )


def build_analytics_response() -> AgentResponse:
    return AgentResponse(
        type=ResponseType.ANALYTICS,
        message=ANALYTICS_MESSAGE,
        payload={
            'expectation': 'analytics',
            'metrics': list(ANALYTICS_METRICS),
        },
    )


def build_general_response() -> AgentResponse:
    return AgentResponse(
        type=ResponseType.GENERAL,
        message=GENERAL_MESSAGE,
        payload={},
    )


def build_error_response(error: AgentError) -> AgentResponse:
    """Error responses never carry a payload."""
    return AgentResponse(
        type=ResponseType.ERROR,
        message=error.message,
        status_code=error.status_code,
    )
