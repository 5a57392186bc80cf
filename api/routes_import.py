"""
api.routes_import - /api/v1/import/<kind> endpoint.

Accepts catalog CSV via multipart file upload or raw request body.
"""

from flask import request, jsonify

from api import api_bp
from import_engine import run_import, KINDS


@api_bp.route("/import/<kind>", methods=["POST"])
def api_import_csv(kind: str):
    """
    POST /api/v1/import/{contacts|arrangements|wire_contacts}?replace=0|1&type=Pin|Socket

    Multipart: field name 'csv_file'
    Or: raw CSV as request body (Content-Type: text/csv).
    """
    if kind not in KINDS:
        return jsonify({"error": f"unknown catalog kind {kind!r}"}), 404

    replace = request.args.get("replace", "0") == "1"
    contact_type = request.args.get("type", "").strip() or None

    if request.content_type and "multipart" in request.content_type:
        f = request.files.get("csv_file")
        if not f:
            return jsonify({"error": "no csv_file in upload"}), 400
        content = f.read()
    else:
        content = request.get_data()

    if not content:
        return jsonify({"error": "empty body"}), 400

    report = run_import(kind, content, replace_existing=replace,
                        contact_type=contact_type)
    return jsonify(report.to_dict())
