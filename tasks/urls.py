from django.urls import path

from . import views

urlpatterns = [
    path("", views.task_collection, name="task-collection"),
    path("<int:task_id>/", views.task_detail, name="task-detail"),
]
