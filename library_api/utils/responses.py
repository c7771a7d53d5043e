from flask import jsonify


def ok(message: str, data=None, status: int = 200, include_data: bool = True):
    body = {"success": True, "message": message}
    if include_data:
        body["data"] = data
    return jsonify(body), status
