# auth.py
import time
from dataclasses import dataclass
from functools import wraps

from flask import current_app, g, jsonify, request
from itsdangerous import BadSignature, URLSafeSerializer
from werkzeug.security import check_password_hash, generate_password_hash

TOKEN_SALT = "hall-booking-auth"


class InvalidToken(Exception):
    pass


@dataclass(frozen=True)
class Identity:
    user_id: int
    email: str
    name: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password_hash: str, password: str) -> bool:
    return check_password_hash(password_hash, password)


def _serializer():
    return URLSafeSerializer(current_app.config["SECRET_KEY"], salt=TOKEN_SALT)


def generate_token(user) -> str:
    """Signed bearer token carrying the user's id, name and role, with an expiry timestamp."""
    payload = {
        "userId": user.id,
        "email": user.email,
        "name": user.name,
        "role": user.role,
        "exp": int(time.time()) + current_app.config["TOKEN_TTL_SECONDS"],
    }
    return _serializer().dumps(payload)


def verify_token(token: str) -> Identity:
    try:
        data = _serializer().loads(token)
    except BadSignature:
        raise InvalidToken("Invalid token")

    if not isinstance(data, dict):
        raise InvalidToken("Malformed token")
    if data.get("exp", 0) < time.time():
        raise InvalidToken("Token expired")

    try:
        return Identity(user_id=int(data["userId"]), email=data["email"], name=data["name"], role=data["role"])
    except (KeyError, TypeError, ValueError):
        raise InvalidToken("Malformed token")


def _bearer_token():
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def login_required(view):
    """Decode the bearer token into g.identity; 401 when absent, 403 when invalid."""
    @wraps(view)
    def wrapped(*args, **kwargs):
        token = _bearer_token()
        if not token:
            return jsonify({"error": "Access denied"}), 401
        try:
            g.identity = verify_token(token)
        except InvalidToken as e:
            current_app.logger.info("Rejected token: %s", e)
            return jsonify({"error": "Invalid token"}), 403
        return view(*args, **kwargs)
    return wrapped


def admin_required(view):
    @wraps(view)
    @login_required
    def wrapped(*args, **kwargs):
        if not g.identity.is_admin:
            return jsonify({"error": "Admin access required"}), 403
        return view(*args, **kwargs)
    return wrapped
