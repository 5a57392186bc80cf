"""
api.routes_builder - /api/v1/glenair/builder configurator sessions.

Each POST to a step endpoint commits that step and returns the full
builder state.  "applied" is false when the step was ignored (wrong
stage, missing value, or a newer step/reset made the result stale).
"""

from flask import request, jsonify

import config
from api import api_bp
from services.builder_sessions import BuilderSessions
from services.catalog_service import SqlReferenceData

sessions = BuilderSessions(
    SqlReferenceData, query_timeout=config.QUERY_TIMEOUT, ttl=config.SESSION_TTL,
)


def _builder_or_404(session_id: str):
    builder = sessions.get(session_id)
    if builder is None:
        return None, (jsonify({"error": "unknown builder session"}), 404)
    return builder, None


def _state(session_id: str, builder, applied: bool = True):
    return jsonify({"id": session_id, "applied": applied, **builder.to_dict()})


@api_bp.route("/glenair/builder", methods=["POST"])
def builder_create():
    """POST /api/v1/glenair/builder - start a new configurator session"""
    session_id, builder = sessions.create()
    return _state(session_id, builder), 201


@api_bp.route("/glenair/builder/<session_id>")
def builder_get(session_id: str):
    builder, err = _builder_or_404(session_id)
    if err:
        return err
    return _state(session_id, builder)


@api_bp.route("/glenair/builder/<session_id>", methods=["DELETE"])
def builder_delete(session_id: str):
    if not sessions.discard(session_id):
        return jsonify({"error": "unknown builder session"}), 404
    return jsonify({"deleted": session_id})


@api_bp.route("/glenair/builder/<session_id>/wire", methods=["POST"])
def builder_wire(session_id: str):
    """JSON body: {system: "AWG"|"MM2", value: "20", conductors: 4}"""
    builder, err = _builder_or_404(session_id)
    if err:
        return err
    data = request.get_json(force=True, silent=True) or {}
    try:
        conductors = int(data.get("conductors", 1))
        applied = builder.select_wire(
            data.get("system", "AWG"), str(data.get("value", "")), conductors,
        )
    except (TypeError, ValueError) as exc:
        return jsonify({"error": str(exc)}), 400
    return _state(session_id, builder, applied)


@api_bp.route("/glenair/builder/<session_id>/contact-size", methods=["POST"])
def builder_contact_size(session_id: str):
    """JSON body: {size: "20"}"""
    builder, err = _builder_or_404(session_id)
    if err:
        return err
    data = request.get_json(force=True, silent=True) or {}
    size = str(data.get("size", "")).strip()
    if not size:
        return jsonify({"error": "size is required"}), 400
    applied = builder.select_contact_size(size)
    return _state(session_id, builder, applied)


@api_bp.route("/glenair/builder/<session_id>/contacts/toggle", methods=["POST"])
def builder_toggle_contact(session_id: str):
    """JSON body: {part_number: "10-375-20"} - must be one of the candidates"""
    builder, err = _builder_or_404(session_id)
    if err:
        return err
    data = request.get_json(force=True, silent=True) or {}
    contact = builder.candidates.find_contact(str(data.get("part_number", "")).strip())
    if contact is None:
        return jsonify({"error": "contact is not a candidate"}), 404
    applied = builder.toggle_contact(contact)
    return _state(session_id, builder, applied)


@api_bp.route("/glenair/builder/<session_id>/contacts/confirm", methods=["POST"])
def builder_confirm_contacts(session_id: str):
    builder, err = _builder_or_404(session_id)
    if err:
        return err
    return _state(session_id, builder, builder.confirm_contacts())


@api_bp.route("/glenair/builder/<session_id>/arrangement", methods=["POST"])
def builder_arrangement(session_id: str):
    """JSON body: {arrangement: "10SL-3"}"""
    builder, err = _builder_or_404(session_id)
    if err:
        return err
    data = request.get_json(force=True, silent=True) or {}
    applied = builder.select_arrangement(str(data.get("arrangement", "")))
    return _state(session_id, builder, applied)


@api_bp.route("/glenair/builder/<session_id>/shell-style", methods=["POST"])
def builder_shell_style(session_id: str):
    """JSON body: {shell_style: "6"}"""
    builder, err = _builder_or_404(session_id)
    if err:
        return err
    data = request.get_json(force=True, silent=True) or {}
    applied = builder.select_shell_style(str(data.get("shell_style", "")))
    return _state(session_id, builder, applied)


@api_bp.route("/glenair/builder/<session_id>/build", methods=["POST"])
def builder_build(session_id: str):
    builder, err = _builder_or_404(session_id)
    if err:
        return err
    result = builder.build()
    return _state(session_id, builder, result is not None)


@api_bp.route("/glenair/builder/<session_id>/reset", methods=["POST"])
def builder_reset(session_id: str):
    builder, err = _builder_or_404(session_id)
    if err:
        return err
    builder.reset()
    return _state(session_id, builder)
