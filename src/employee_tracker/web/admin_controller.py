from __future__ import annotations

from flask import Flask, jsonify, request

from ..core.enums import AttendancePolicy, TaskFilter
from ..core.exceptions import ValidationError
from ..container import Container
from .guards import error_response, list_response, make_guards


def _json() -> dict:
    return request.get_json(silent=True) or {}


def _task_filter(value: str | None) -> TaskFilter:
    try:
        return TaskFilter(value or TaskFilter.ALL.value)
    except ValueError:
        raise ValidationError(f"Unknown task filter: {value!r}")


def _employee_id(value) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Employee id is not valid: {value!r}")


def register(app: Flask, container: Container) -> None:
    _, admin_required = make_guards(container)

    @app.route("/admin/dashboard", methods=["GET"], endpoint="admin_dashboard")
    @admin_required
    def admin_dashboard():
        with container.admin_dashboard() as state:
            payload = state.to_dict()
        if not payload["recent_activity"]:
            payload["empty_message"] = "No recent activities"
        return jsonify({"success": True, **payload})

    @app.route("/admin/employees", methods=["GET"], endpoint="admin_employees")
    @admin_required
    def admin_employees():
        query = request.args.get("q", "")
        department = request.args.get("department")
        employees = container.user_service.search_employees(query, department)
        empty = "No employees match your search criteria." if query else "No employees yet."
        return list_response("employees", [u.public_dict() for u in employees], empty)

    @app.route("/admin/employees", methods=["POST"], endpoint="add_employee")
    @admin_required
    def add_employee():
        data = _json()
        user_id = container.user_service.add_employee(
            name=data.get("name", ""),
            email=data.get("email", ""),
            password=data.get("password", ""),
            designation=data.get("designation", ""),
            department=data.get("department", ""),
            joining_date=data.get("joining_date"),
            contact=data.get("contact"),
        )
        return jsonify({"success": True, "user_id": user_id}), 201

    @app.route("/admin/employees/<int:user_id>", methods=["GET"], endpoint="employee_detail")
    @admin_required
    def employee_detail(user_id: int):
        user = container.user_service.get_user(user_id)
        if not user:
            return error_response("Employee does not exist", 404)

        reviews = container.review_service.list_for_employee(user_id)
        attendance = container.attendance_service.history(user_id)
        return jsonify(
            {
                "success": True,
                "employee": user.public_dict(),
                "tasks": [t.to_dict() for t in container.task_service.list_for_employee(user_id)],
                "task_counters": container.task_service.counters(user_id).to_dict(),
                "reviews": [r.to_dict() for r in reviews],
                "average_rating": round(container.review_service.average_for_employee(user_id), 2),
                "attendance": [a.to_dict() for a in attendance],
                "attendance_summary": container.attendance_service.summary(user_id),
            }
        )

    @app.route("/admin/employees/<int:user_id>", methods=["PUT"], endpoint="update_employee")
    @admin_required
    def update_employee(user_id: int):
        data = _json()
        user = container.user_service.update_employee(
            user_id,
            name=data.get("name"),
            email=data.get("email"),
            password=data.get("password"),
            designation=data.get("designation"),
            department=data.get("department"),
            joining_date=data.get("joining_date"),
            contact=data.get("contact"),
        )
        container.session.refresh(user)
        return jsonify({"success": True, "employee": user.public_dict()})

    @app.route("/admin/employees/<int:user_id>", methods=["DELETE"], endpoint="delete_employee")
    @admin_required
    def delete_employee(user_id: int):
        container.user_service.delete_employee(current_role=container.session.current_user.role, user_id=user_id)
        return jsonify({"success": True})

    @app.route("/admin/tasks", methods=["GET"], endpoint="admin_tasks")
    @admin_required
    def admin_tasks():
        selected = _task_filter(request.args.get("filter"))
        tasks = container.task_service.list_tasks(selected)
        counters = container.task_service.counters()
        payload = {
            "success": True,
            "tasks": [t.to_dict() for t in tasks],
            "counters": counters.to_dict(),
        }
        if not tasks:
            payload["empty_message"] = "No Tasks Found"
        return jsonify(payload)

    @app.route("/admin/tasks", methods=["POST"], endpoint="add_task")
    @admin_required
    def add_task():
        data = _json()
        task_id = container.task_service.assign_task(
            employee_id=_employee_id(data.get("employee_id")),
            title=data.get("title", ""),
            description=data.get("description", ""),
            priority=data.get("priority", "Medium"),
            deadline=data.get("deadline"),
            assigned_date=data.get("assigned_date"),
        )
        return jsonify({"success": True, "task_id": task_id}), 201

    @app.route("/admin/tasks/<int:task_id>", methods=["PUT"], endpoint="update_task")
    @admin_required
    def update_task(task_id: int):
        data = _json()
        assignee = data.get("employee_id")
        task = container.task_service.update_task(
            task_id,
            title=data.get("title"),
            description=data.get("description"),
            priority=data.get("priority"),
            status=data.get("status"),
            deadline=data.get("deadline"),
            employee_id=_employee_id(assignee) if assignee is not None else None,
        )
        return jsonify({"success": True, "task": task.to_dict()})

    @app.route("/admin/tasks/<int:task_id>", methods=["DELETE"], endpoint="delete_task")
    @admin_required
    def delete_task(task_id: int):
        container.task_service.delete_task(task_id)
        return jsonify({"success": True})

    @app.route("/admin/reviews", methods=["POST"], endpoint="add_review")
    @admin_required
    def add_review():
        data = _json()
        review_id = container.review_service.add_review(
            employee_id=_employee_id(data.get("employee_id")),
            quality=data.get("quality"),
            communication=data.get("communication"),
            innovation=data.get("innovation"),
            timeliness=data.get("timeliness"),
            attendance=data.get("attendance"),
            overall_rating=data.get("overall_rating"),
            remarks=data.get("remarks", ""),
            review_date=data.get("date"),
            reviewed_by=container.session.current_user.name,
        )
        return jsonify({"success": True, "review_id": review_id}), 201

    @app.route("/admin/attendance", methods=["POST"], endpoint="mark_attendance")
    @admin_required
    def mark_attendance():
        data = _json()
        try:
            policy = AttendancePolicy(data.get("policy", AttendancePolicy.UPSERT.value))
        except ValueError:
            raise ValidationError("Attendance policy must be 'append' or 'upsert'")

        fields = {
            "policy": policy,
            "status": data.get("status", "Present"),
            "work_date": data.get("date"),
            "check_in_time": data.get("check_in_time"),
            "check_out_time": data.get("check_out_time"),
            "remarks": data.get("remarks", ""),
        }
        target = data.get("employee_id")
        if target == "all":
            employee_ids = [u.user_id for u in container.user_service.list_employees()]
            ids = container.attendance_service.mark_for_all(employee_ids, **fields)
        else:
            ids = [container.attendance_service.mark_attendance(employee_id=_employee_id(target), **fields)]
        return jsonify({"success": True, "attendance_ids": ids}), 201
