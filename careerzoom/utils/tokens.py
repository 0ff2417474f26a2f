from flask import current_app
from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired

SALT = "careerzoom-auth"


def _serializer():
    return URLSafeTimedSerializer(current_app.config["SECRET_KEY"], salt=SALT)


def generate_token(user_id) -> str:
    return _serializer().dumps({"id": user_id})


def verify_token(token):
    """Return the user id inside ``token`` or None if it is invalid or expired."""
    max_age = current_app.config.get("TOKEN_MAX_AGE")
    try:
        data = _serializer().loads(token, max_age=max_age)
    except SignatureExpired:
        current_app.logger.info('Rejected expired auth token')
        return None
    except BadSignature:
        return None
    return data.get("id") if isinstance(data, dict) else None


def token_from_header(header):
    if not header:
        return None
    if header.startswith("Bearer "):
        return header[len("Bearer "):].strip() or None
    return header.strip() or None
