import json

from django.http import HttpResponse, HttpResponseNotAllowed, JsonResponse
from django.views.decorators.csrf import csrf_exempt

from .exceptions import InvalidDeadline, InvalidStatus, InvalidTask, TaskAlreadyExists, TaskError, TaskNotFound
from .service import TaskLifecycleService

ERROR_STATUS = {
    TaskNotFound: 404,
    TaskAlreadyExists: 409,
    InvalidDeadline: 400,
    InvalidStatus: 400,
    InvalidTask: 400,
}


def task_to_dict(task):
    return {
        "id": task.pk,
        "name": task.name,
        "description": task.description,
        "status": int(task.status),
        "deadline": task.deadline.isoformat(),
    }


def _error(message, status=400):
    return JsonResponse({"error": message}, status=status)


def _error_for(exc):
    return _error(exc.message, ERROR_STATUS.get(type(exc), 400))


def _read_payload(request, required):
    try:
        payload = json.loads(request.body.decode("utf-8") or "{}")
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ValueError(f"invalid json: {e}") from e
    if not isinstance(payload, dict):
        raise ValueError("body must be a JSON object")
    missing = [k for k in required if k not in payload]
    if missing:
        raise ValueError(f"missing field(s): {', '.join(missing)}")
    return payload


@csrf_exempt
def task_collection(request):
    """
    GET  /api/tasks/                  all tasks
    GET  /api/tasks/?status=2         tasks with that status
    GET  /api/tasks/?name=...         tasks with that exact name
    (status and name cannot be combined)
    POST /api/tasks/
    body: {"name": "...", "description": "...", "deadline": "2024-09-30", "status": 1}
    """
    service = TaskLifecycleService()

    if request.method == "GET":
        if "status" in request.GET and "name" in request.GET:
            return _error("filter by status or by name, not both")
        try:
            if "status" in request.GET:
                try:
                    status = int(request.GET["status"])
                except ValueError:
                    return _error("status must be an integer")
                tasks = service.read_by_status(status)
            elif "name" in request.GET:
                tasks = service.read_by_name(request.GET["name"])
            else:
                tasks = service.read_all()
        except TaskError as e:
            return _error_for(e)
        return JsonResponse({"tasks": [task_to_dict(t) for t in tasks]})

    if request.method == "POST":
        try:
            payload = _read_payload(request, ("name", "deadline", "status"))
        except ValueError as e:
            return _error(str(e))
        try:
            task = service.create(
                payload["name"],
                payload.get("description", ""),
                payload["deadline"],
                payload["status"],
            )
        except TaskError as e:
            return _error_for(e)
        return JsonResponse(task_to_dict(task), status=201)

    return HttpResponseNotAllowed(["GET", "POST"])


@csrf_exempt
def task_detail(request, task_id):
    """
    GET          /api/tasks/<id>/
    PUT          /api/tasks/<id>/
    body: {"description": "...", "deadline": "2024-10-05", "status": 2}
    DELETE       /api/tasks/<id>/
    """
    service = TaskLifecycleService()

    try:
        if request.method == "GET":
            return JsonResponse(task_to_dict(service.read(task_id)))

        if request.method == "PUT":
            try:
                payload = _read_payload(request, ("description", "deadline", "status"))
            except ValueError as e:
                return _error(str(e))
            task = service.update(
                task_id,
                payload["description"],
                payload["deadline"],
                payload["status"],
            )
            return JsonResponse(task_to_dict(task))

        if request.method == "DELETE":
            service.delete(task_id)
            return HttpResponse(status=204)
    except TaskError as e:
        return _error_for(e)

    return HttpResponseNotAllowed(["GET", "PUT", "DELETE"])
