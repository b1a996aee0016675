from flask import jsonify


def success_response(payload=None, message=None, status=200):
    if isinstance(payload, list):
        return jsonify(payload), status
    resp = dict(payload or {})
    if message:
        resp["message"] = message
    return jsonify(resp), status


def error_response(code, message, details=None, status=400):
    err = {
        "error": {
            "code": code,
            "message": message,
            "details": details or {}
        }
    }
    return jsonify(err), status
