from __future__ import annotations

from flask import Flask, jsonify, request

from ..core.constants import UNKNOWN_LABEL
from ..container import Container
from .guards import make_guards


def register(app: Flask, container: Container) -> None:
    login_required, _ = make_guards(container)

    @app.route("/messages/unread", methods=["GET"], endpoint="unread_count")
    @login_required
    def unread_count():
        user_id = container.session.current_user.user_id
        return jsonify({"success": True, "unread_count": container.message_service.unread_count(user_id)})

    @app.route("/messages/<int:other_id>", methods=["GET"], endpoint="conversation")
    @login_required
    def conversation(other_id: int):
        user_id = container.session.current_user.user_id
        other = container.user_service.get_user(other_id)
        with container.conversation(user_id, other_id) as state:
            messages = [m.to_dict() for m in state.messages]
            unread = state.unread_count

        payload = {
            "success": True,
            "other_user": {"user_id": other_id, "name": other.name if other else f"{UNKNOWN_LABEL} User"},
            "messages": messages,
            "unread_count": unread,
        }
        if not messages:
            payload["empty_message"] = "No messages yet"
        return jsonify(payload)

    @app.route("/messages/<int:other_id>", methods=["POST"], endpoint="send_message")
    @login_required
    def send_message(other_id: int):
        data = request.get_json(silent=True) or {}
        message_id = container.message_service.send_message(
            sender_id=container.session.current_user.user_id,
            receiver_id=other_id,
            text=data.get("message", ""),
        )
        return jsonify({"success": True, "message_id": message_id}), 201
