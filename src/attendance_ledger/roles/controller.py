from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..common.http import caller_required, json_body, json_endpoint
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    roles = container.role_service

    def _added(identity: str, role: Role):
        return jsonify({"success": True, "identity": identity.strip(), "role": role.value}), 201

    @app.route("/admins", methods=["POST"], endpoint="add_admin")
    @caller_required
    @json_endpoint
    def add_admin():
        identity = json_body().get("identity", "")
        roles.add_admin(g.caller, identity)
        return _added(identity, Role.ADMIN)

    @app.route("/professors", methods=["POST"], endpoint="add_professor")
    @caller_required
    @json_endpoint
    def add_professor():
        identity = json_body().get("identity", "")
        roles.add_professor(g.caller, identity)
        return _added(identity, Role.PROFESSOR)

    @app.route("/students", methods=["POST"], endpoint="add_student")
    @caller_required
    @json_endpoint
    def add_student():
        identity = json_body().get("identity", "")
        roles.add_student(g.caller, identity)
        return _added(identity, Role.STUDENT)

    @app.route("/owner", methods=["GET"], endpoint="owner")
    @json_endpoint
    def owner():
        return jsonify({"owner": roles.owner(), "variant": roles.policy.variant.value})

    @app.route("/roles/<identity>", methods=["GET"], endpoint="role_of")
    @json_endpoint
    def role_of(identity: str):
        role = roles.get_role(identity)
        return jsonify(
            {
                "identity": identity,
                "role": role.value if role else None,
                "is_owner": roles.is_owner(identity),
            }
        )

    @app.route("/roles", methods=["GET"], endpoint="list_roles")
    @json_endpoint
    def list_roles():
        role_s = request.args.get("role", "")
        try:
            role = Role(role_s)
        except ValueError:
            raise ValidationError("role must be one of: admin, professor, student")

        members = roles.list_members(role)
        return jsonify(
            {
                "role": role.value,
                "members": [
                    {"identity": m.identity, "added_by": m.added_by, "added_at": m.added_at.isoformat()}
                    for m in members
                ],
            }
        )
