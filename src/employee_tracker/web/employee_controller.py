from __future__ import annotations

from flask import Flask, jsonify, request

from ..core.enums import TaskFilter
from ..core.exceptions import AuthorizationError, ValidationError
from ..container import Container
from ..dashboard.aggregation import rating_label
from .guards import error_response, list_response, make_guards


def register(app: Flask, container: Container) -> None:
    login_required, _ = make_guards(container)

    def me():
        return container.session.current_user

    @app.route("/me/home", methods=["GET"], endpoint="home")
    @login_required
    def home():
        with container.employee_home(me().user_id) as state:
            payload = state.to_dict()
        if not payload["recent_tasks"]:
            payload["empty_message"] = "No tasks yet"
        return jsonify({"success": True, "user": me().public_dict(), **payload})

    @app.route("/me/tasks", methods=["GET"], endpoint="my_tasks")
    @login_required
    def my_tasks():
        try:
            selected = TaskFilter(request.args.get("filter") or TaskFilter.ALL.value)
        except ValueError:
            raise ValidationError("Unknown task filter")

        user_id = me().user_id
        tasks = container.task_service.list_for_employee(user_id, selected)
        payload = {
            "success": True,
            "tasks": [t.to_dict() for t in tasks],
            "counters": container.task_service.counters(user_id).to_dict(),
        }
        if not tasks:
            payload["empty_message"] = "No tasks yet"
        return jsonify(payload)

    @app.route("/tasks/<int:task_id>/status", methods=["PATCH"], endpoint="update_task_status")
    @login_required
    def update_task_status(task_id: int):
        task = container.task_service.get_task(task_id)
        if not task:
            return error_response("Task does not exist", 404)
        if not me().is_admin and task.employee_id != me().user_id:
            raise AuthorizationError("You do not have permission")

        data = request.get_json(silent=True) or {}
        container.task_service.update_status(task_id, data.get("status", ""))
        return jsonify({"success": True})

    @app.route("/me/reviews", methods=["GET"], endpoint="my_reviews")
    @login_required
    def my_reviews():
        user_id = me().user_id
        reviews = container.review_service.list_for_employee(user_id)
        latest = reviews[0] if reviews else None
        payload = {
            "success": True,
            "reviews": [r.to_dict() for r in reviews],
            "average_rating": round(container.review_service.average_for_employee(user_id), 2),
            "latest_review": latest.to_dict() if latest else None,
            "latest_label": rating_label(latest.overall_rating) if latest else None,
        }
        if not reviews:
            payload["empty_message"] = "No reviews yet"
        return jsonify(payload)

    @app.route("/me/attendance", methods=["GET"], endpoint="my_attendance")
    @login_required
    def my_attendance():
        records = container.attendance_service.history(me().user_id, limit=None)
        return list_response("attendance", [r.to_dict() for r in records], "No attendance records")
