import logging

from django.db import IntegrityError

from .deadlines import parse_deadline
from .exceptions import InvalidStatus, InvalidTask, TaskAlreadyExists, TaskNotFound
from .models import Task, TaskStatus
from .store import DjangoTaskStore

logger = logging.getLogger(__name__)


def coerce_status(value):
    """Return the TaskStatus member for value or raise InvalidStatus."""
    # only real ints; TaskStatus(True) and TaskStatus(2.0) would otherwise match
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidStatus(f"Status {value!r} is not one of {list(TaskStatus.values)}.")
    try:
        return TaskStatus(value)
    except ValueError:
        raise InvalidStatus(f"Status {value!r} is not one of {list(TaskStatus.values)}.") from None


def require_text(field_name, value):
    if not isinstance(value, str):
        raise InvalidTask(f"Task {field_name} must be a string, got {type(value).__name__}.")
    return value


class TaskLifecycleService:
    """
    Task CRUD.

    Business rules live here (unique names, existence checks, deadline and
    status validation); storage is delegated to the injected store.
    """

    TODO = TaskStatus.TODO
    WORK_IN_PROGRESS = TaskStatus.WORK_IN_PROGRESS
    FINISHED = TaskStatus.FINISHED

    def __init__(self, store=None):
        self.store = store if store is not None else DjangoTaskStore()

    def create(self, name, description, deadline, status):
        name = require_text("name", name)
        if self.store.count_by_field("name", name) > 0:
            logger.warning("create rejected: task name %r already taken", name)
            raise TaskAlreadyExists()

        description = require_text("description", description)
        status = coerce_status(status)
        deadline = parse_deadline(deadline)

        task = Task(name=name, description=description, status=status, deadline=deadline)
        self.store.persist(task)
        try:
            self.store.commit()
        except IntegrityError as e:
            # unique index on name caught a concurrent create
            if self.store.count_by_field("name", name) > 0:
                logger.warning("create lost a race for task name %r", name)
                raise TaskAlreadyExists() from e
            raise

        logger.info("created task id=%s name=%r", task.pk, task.name)
        return task

    def read(self, task_id):
        task = self.store.find_by_id(task_id)
        if task is None:
            raise TaskNotFound()
        return task

    def read_all(self):
        return self._require_any(self.store.find_all())

    def read_by_status(self, status):
        status = coerce_status(status)
        return self._require_any(self.store.find_by_field("status", status))

    def read_by_name(self, name):
        return self._require_any(self.store.find_by_field("name", name))

    def update(self, task_id, description, deadline, status):
        description = require_text("description", description)
        deadline = parse_deadline(deadline)
        status = coerce_status(status)

        task = self.read(task_id)
        task.description = description
        task.status = status
        task.deadline = deadline

        self.store.persist(task)
        self.store.commit()

        logger.info("updated task id=%s", task.pk)
        return task

    def delete(self, task_id):
        task = self.read(task_id)
        self.store.remove(task)
        self.store.commit()
        logger.info("deleted task id=%s", task_id)

    @staticmethod
    def _require_any(tasks):
        tasks = list(tasks)
        if not tasks:
            raise TaskNotFound()
        return tasks
