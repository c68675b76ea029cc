NOT_FOUND_MESSAGE = "Task was not found."
ALREADY_EXISTS_MESSAGE = "Task with this name already exists."


class TaskError(Exception):
    """Base class for errors the task service reports back to its caller."""

    default_message = "Task operation failed."

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class TaskNotFound(TaskError):
    default_message = NOT_FOUND_MESSAGE


class TaskAlreadyExists(TaskError):
    default_message = ALREADY_EXISTS_MESSAGE


class InvalidDeadline(TaskError, ValueError):
    default_message = "Deadline could not be parsed."


class InvalidStatus(TaskError, ValueError):
    default_message = "Unknown task status."


class InvalidTask(TaskError, ValueError):
    default_message = "Task fields are invalid."
