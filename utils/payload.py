from flask import request


def request_data() -> dict:
    """JSON body when there is one, form fields otherwise."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()
