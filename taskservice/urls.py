from django.urls import include, path

urlpatterns = [
    path("api/tasks/", include("tasks.urls")),
]
