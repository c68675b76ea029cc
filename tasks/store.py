"""
Persistence for tasks.

The service never touches the ORM directly; it talks to a store with a small
unit-of-work style contract:

    count_by_field(field_name, value) -> int
    find_by_id(task_id) -> Task | None
    find_by_field(field_name, value) -> list[Task]
    find_all() -> list[Task]
    persist(task)   stage a create or update
    remove(task)    stage a deletion
    commit()        apply everything staged, in order, atomically

DjangoTaskStore is the ORM-backed implementation used in production.
"""
import logging

from django.core.exceptions import FieldDoesNotExist
from django.db import transaction

from .models import Task

logger = logging.getLogger(__name__)

PERSIST = "persist"
REMOVE = "remove"


class DjangoTaskStore:

    def __init__(self, using=None):
        self.using = using
        self._staged = []

    @property
    def pending(self):
        return tuple(self._staged)

    def _queryset(self):
        qs = Task.objects.all()
        if self.using:
            qs = qs.using(self.using)
        return qs

    def _lookup(self, field_name, value):
        try:
            Task._meta.get_field(field_name)
        except FieldDoesNotExist:
            raise ValueError(f"Task has no field named {field_name!r}") from None
        return self._queryset().filter(**{field_name: value})

    def count_by_field(self, field_name, value):
        return self._lookup(field_name, value).count()

    def find_by_id(self, task_id):
        return self._queryset().filter(pk=task_id).first()

    def find_by_field(self, field_name, value):
        return list(self._lookup(field_name, value))

    def find_all(self):
        return list(self._queryset())

    def persist(self, task):
        self._staged.append((PERSIST, task))

    def remove(self, task):
        self._staged.append((REMOVE, task))

    def commit(self):
        staged, self._staged = self._staged, []
        if not staged:
            return
        # saves assign pks and deletes clear them; put both back if the transaction rolls back
        before = [(task, task.pk, task._state.adding) for _, task in staged]
        try:
            with transaction.atomic(using=self.using):
                for action, task in staged:
                    if action == PERSIST:
                        task.save(using=self.using)
                    else:
                        task.delete(using=self.using)
        except Exception:
            for task, pk, adding in before:
                task.pk = pk
                task._state.adding = adding
            raise
        logger.debug("committed %d staged task change(s)", len(staged))
