import logging
import os
from typing import Mapping, Optional

from flask import Blueprint, Flask, current_app, json, jsonify, request
from werkzeug.exceptions import BadRequest, HTTPException, NotFound

from .store import User, UserStore


logger = logging.getLogger(__name__)

DEFAULT_PORT = 3000

routes = Blueprint("routes", __name__)


def _store() -> UserStore:
    return current_app.extensions["user_store"]


def _text(body: str):
    return body, 200, {"Content-Type": "text/plain; charset=utf-8"}


def _user_from_body() -> User:
    data = request.get_json(force=True)
    try:
        return User.from_payload(data)
    except ValueError as exc:
        raise BadRequest(str(exc))


@routes.get("/")
def root():
    return _text("Hello World")


@routes.get("/user")
def sample_user():
    return jsonify({"id": 1, "username": "yatharth"})


@routes.get("/greet")
def greet():
    # missing ?name= raises a 400 from werkzeug
    name = request.args["name"]
    return _text(f"Greetings from the axum server {name}")


@routes.post("/echo")
def echo():
    data = request.get_json(force=True)
    message = data.get("message") if isinstance(data, dict) else None
    if not isinstance(message, str):
        raise BadRequest("message must be a string")
    logger.debug("echo payload: %r", data)
    return jsonify({"message": f"This is some added response coming from server {message}"})


@routes.get("/greet/<name>")
def greet_path(name: str):
    return _text(name)


@routes.get("/sharedstate")
def shared_state():
    return _text(f" Total Users in  memory {len(_store())}")


@routes.post("/create-user")
def create_user():
    user = _user_from_body()
    _store().insert(user.id, user)
    logger.debug("created user %s", user.id)
    return jsonify({"message": "User Created"})


@routes.get("/getuser/<uid>")
def get_user(uid: str):
    user = _store().get(uid)
    if user is None:
        raise NotFound()
    return jsonify(user.to_dict())


@routes.get("/users")
def list_users():
    return jsonify([u.to_dict() for u in _store().list()])


@routes.put("/update-user/<uid>")
def update_user(uid: str):
    # keyed by the path id; the stored record keeps whatever id the body carries
    user = _user_from_body()
    if not _store().replace(uid, user):
        raise NotFound()
    logger.debug("updated user %s", uid)
    return jsonify({"message": f"User with id {uid} updated"})


@routes.delete("/delete-user/<uid>")
def delete_user(uid: str):
    if not _store().remove(uid):
        raise NotFound()
    logger.debug("deleted user %s", uid)
    return jsonify({"message": f"User with id {uid} deleted"})


def _http_error(exc: HTTPException):
    # keep the headers werkzeug attaches, e.g. Allow on a 405
    response = exc.get_response()
    response.data = json.dumps({"error": (exc.name or "error").lower()})
    response.content_type = "application/json"
    return response


def create_app(store: Optional[UserStore] = None) -> Flask:
    app = Flask(__name__)
    app.extensions["user_store"] = store if store is not None else UserStore()
    app.register_blueprint(routes)
    app.register_error_handler(HTTPException, _http_error)
    return app


def port_from_env(environ: Optional[Mapping[str, str]] = None) -> int:
    """Read the listening port from ``PORT``, defaulting to 3000.

    Raises ValueError for anything that is not an integer in 1..65535.
    """
    env = os.environ if environ is None else environ
    raw = env.get("PORT", str(DEFAULT_PORT))
    try:
        port = int(raw)
    except ValueError:
        raise ValueError(f"PORT must be a number, got {raw!r}")
    if not 1 <= port <= 65535:
        raise ValueError(f"PORT must be between 1 and 65535, got {port}")
    return port


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    port = port_from_env()
    app = create_app()
    logger.info("Server running at http://0.0.0.0:%d", port)
    # threaded=True so requests are served concurrently
    app.run(host="0.0.0.0", port=port, threaded=True)
