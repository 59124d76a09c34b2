from flask import request

from namecontest.services.contest.results import CONFIGURATION, NOT_FOUND

STATUS_BY_KIND = {CONFIGURATION: 409, NOT_FOUND: 404}


def request_payload():
    payload = request.get_json(silent=True)
    if isinstance(payload, dict):
        return payload
    return request.form.to_dict()


def payload_text(data, field):
    """Stripped string value of ``field``; ValueError when it is not text."""
    value = data.get(field)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"'{field}' must be text.")
    return value.strip()


def rejection(result):
    return result, STATUS_BY_KIND.get(result["kind"], 400)
