"""Error taxonomy for the command agent and its collaborators."""

from typing import Optional


class AgentError(Exception):
    """Base class for failures that map onto an error response."""

    status_code = 500
    default_message = "Unexpected error while processing your command."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InputError(AgentError):
    """Missing or unusable user input; the user can correct it."""

    status_code = 400
    default_message = "I need a command to get started."


class InternalError(AgentError):
    """Unexpected failure while parsing or synthesizing a command."""

    status_code = 500


class TaskNotFoundError(AgentError):
    status_code = 404
    default_message = "Task not found."


class InvalidStatusError(AgentError):
    status_code = 400
    default_message = "Unknown task status."
