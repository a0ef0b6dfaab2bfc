"""
api.routes_import - /api/v1/import endpoint.

The CSV arrives either as a multipart upload (field 'csv_file') or as
the raw request body; load options travel as query arguments.
"""

from typing import Optional

from flask import request, jsonify

from api import api_bp
from loader.load_session import run_load
from loader.options import LoadOptions


def _uploaded_csv() -> Optional[bytes]:
    if "multipart" in (request.content_type or ""):
        upload = request.files.get("csv_file")
        return upload.read() if upload else None
    return request.get_data()


@api_bp.route("/import", methods=["POST"])
def api_import_csv():
    """
    POST /api/v1/import?dummy=1&strict=1&include_all=1
                       &mandatory=Name,SKU&force_inclusion=Brand
                       &match_by=SKU&verbose=1&reload=1

    Returns LoadReport.to_dict(); 400 on an empty upload or a file-level
    LoadError.
    """
    content = _uploaded_csv()
    if not content:
        return jsonify({"error": "no CSV content (send csv_file or a raw body)"}), 400

    report = run_load(content, LoadOptions.from_mapping(request.args))
    return jsonify(report.to_dict())
