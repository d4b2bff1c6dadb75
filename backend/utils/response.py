"""
response.py — JSON response helpers used by the API routes.

Successful responses are the payload itself. Failures are a flat
{ "error": str } object, with an optional "details" string.
"""

from flask import jsonify


def success(payload=None, status_code=200):
    return jsonify(payload if payload is not None else {}), status_code


def error(message="An error occurred", status_code=400, details=None):
    payload = {"error": message}
    if details:
        payload["details"] = details
    return jsonify(payload), status_code


def bad_request(message="Bad request."):
    return error(message, status_code=400)


def server_error(message="Internal server error.", details=None):
    return error(message, status_code=500, details=details)
