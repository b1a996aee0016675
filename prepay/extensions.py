from flask import current_app
from flask_marshmallow import Marshmallow
from flask_cors import CORS

ma = Marshmallow()
cors = CORS()


def get_store():
    return current_app.extensions["submission_store"]


def get_nas():
    return current_app.extensions.get("nas_session")
