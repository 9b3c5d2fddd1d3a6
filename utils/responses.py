from flask import jsonify


def ok(message: str, data=None, status: int = 200):
    body = {"success": True, "message": message}
    if data is not None:
        body["data"] = data
    return jsonify(body), status


def fail(message: str, status: int, error=None, errors=None):
    body = {"success": False, "message": message}
    if error is not None:
        body["error"] = error
    if errors is not None:
        body["errors"] = errors
    return jsonify(body), status
