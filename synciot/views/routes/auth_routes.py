from flask import Blueprint, jsonify
from flask_login import current_user, login_required, login_user, logout_user

from synciot.services.auth_service import AuthService
from synciot.utils.errors import ValidationError
from synciot.views.forms import LoginForm, SignupForm

auth_bp = Blueprint('auth', __name__, url_prefix='/api/auth')


@auth_bp.route('/signup', methods=['POST'])
def signup():
    form = SignupForm()
    if not form.validate_on_submit():
        raise ValidationError("Email, password, and name are required")

    user, token = AuthService.signup(form.email.data, form.password.data, form.name.data)
    login_user(user)
    return jsonify({
        "success": True,
        "message": "User created successfully",
        "token": token,
        "user": user.to_dict(),
    }), 201


@auth_bp.route('/login', methods=['POST'])
def login():
    form = LoginForm()
    if not form.validate_on_submit():
        raise ValidationError("Email and password are required")

    user, token = AuthService.login(form.email.data, form.password.data)
    login_user(user)
    return jsonify({
        "success": True,
        "message": "Login successful",
        "token": token,
        "user": user.to_dict(),
    }), 200


@auth_bp.route('/me', methods=['GET'])
@login_required
def me():
    return jsonify({"success": True, "user": current_user.to_dict()})


@auth_bp.route('/logout', methods=['POST'])
@login_required
def logout():
    logout_user()
    return jsonify({"success": True, "message": "Logged out"})
