from django.db import models


class TaskStatus(models.IntegerChoices):
    TODO = 1, "To do"
    WORK_IN_PROGRESS = 2, "Work in progress"
    FINISHED = 3, "Finished"


class Task(models.Model):
    name = models.CharField(max_length=255, unique=True)
    description = models.TextField(blank=True, default="")
    status = models.PositiveSmallIntegerField(choices=TaskStatus.choices, default=TaskStatus.TODO)
    deadline = models.DateTimeField()

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return self.name
