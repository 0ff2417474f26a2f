from flask import current_app, request, jsonify, abort
from flask_login import login_required, current_user
from . import bp
from ...extensions import db
from ...models.user import User
from ...utils.forms import form_from_json, validate_form
from ...utils.tokens import generate_token
from .forms import RegisterForm, LoginForm, ProfileForm


def _json_body():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        abort(400, description="Request body must be a JSON object")
    return payload


@bp.post("/auth/register")
def register():
    form = validate_form(form_from_json(RegisterForm, _json_body()))
    if User.query.filter_by(email=form.email.data).first():
        abort(400, description="User already exists")
    user = User(email=form.email.data, first_name=form.firstName.data or None,
                last_name=form.lastName.data or None, role="student")
    user.set_password(form.password.data)
    db.session.add(user)
    db.session.commit()
    current_app.logger.info('Registered user %s', user.id)
    body = user.to_dict()
    body["token"] = generate_token(user.id)
    return jsonify(body), 201


@bp.post("/auth/login")
def login():
    form = validate_form(form_from_json(LoginForm, _json_body()))
    user = User.query.filter_by(email=form.email.data).first()
    if not user or not user.check_password(form.password.data):
        abort(401, description="Invalid credentials")
    body = user.to_dict()
    body["token"] = generate_token(user.id)
    return jsonify(body)


@bp.get("/users/profile")
@login_required
def get_profile():
    return jsonify(current_user.to_dict())


@bp.put("/users/profile")
@login_required
def update_profile():
    payload = _json_body()
    form = validate_form(form_from_json(ProfileForm, payload))
    if "firstName" in payload:
        current_user.first_name = form.firstName.data or None
    if "lastName" in payload:
        current_user.last_name = form.lastName.data or None
    db.session.commit()
    return jsonify(current_user.to_dict())
