from datetime import date
import logging
import os

import click
from flask import Blueprint, Flask, current_app, g, jsonify, request
from sqlalchemy.exc import SQLAlchemyError

from assistant import BookingAssistant
from auth import admin_required, generate_token, hash_password, login_required, verify_password
from database import db  # <-- import the singleton db
from models import Feedback, User
from reservations import BookingConflict, ReservationStore
from vocabulary import DEFAULT_VOCABULARY

api = Blueprint("api", __name__)


def _database_url():
    url = os.environ.get("DATABASE_URL")
    # Heroku/Render style URLs use the scheme SQLAlchemy dropped
    if url and url.startswith("postgres://"):
        url = "postgresql://" + url[len("postgres://"):]
    return url


def create_app(config=None):
    app = Flask(__name__, instance_relative_config=True)
    # It is highly recommended to use a strong, long, random key here, not a simple string
    app.config["SECRET_KEY"] = os.environ.get("FLASK_SECRET_KEY", "dev-secret-key-CHANGE-ME-IN-PROD")

    # Ensure instance folder exists
    os.makedirs(app.instance_path, exist_ok=True)

    # DB config
    app.config.setdefault(
        "SQLALCHEMY_DATABASE_URI",
        _database_url() or f"sqlite:///{os.path.join(app.instance_path, 'hall_booking.db')}",
    )
    app.config.setdefault("SQLALCHEMY_TRACK_MODIFICATIONS", False)
    app.config.setdefault("TOKEN_TTL_SECONDS", int(os.environ.get("TOKEN_TTL_SECONDS", 24 * 3600)))
    app.config.setdefault("CORS_ORIGIN", os.environ.get("CORS_ORIGIN", "*"))
    app.config.setdefault("ADMIN_EMAIL", os.environ.get("ADMIN_EMAIL"))
    app.config.setdefault("ADMIN_PASSWORD", os.environ.get("ADMIN_PASSWORD"))
    app.config.setdefault("ADMIN_NAME", os.environ.get("ADMIN_NAME", "Administrator"))
    app.config.setdefault("HALL_VOCABULARY", DEFAULT_VOCABULARY)
    app.config.setdefault("ASSISTANT_CLOCK", date.today)
    if config:
        app.config.update(config)

    # Initialize db with the app
    db.init_app(app)
    app.extensions["booking_assistant"] = BookingAssistant(
        app.config["HALL_VOCABULARY"], app.config["ASSISTANT_CLOCK"]
    )
    app.register_blueprint(api)
    _register_handlers(app)
    _register_cli(app)

    # Initialize DB and create default admin
    with app.app_context():
        db.create_all()
        _seed_admin(app)

    return app


def _seed_admin(app):
    email = app.config.get("ADMIN_EMAIL")
    password = app.config.get("ADMIN_PASSWORD")
    if not email or not password:
        return
    if User.query.filter_by(email=email).first():
        return
    db.session.add(User(name=app.config["ADMIN_NAME"], email=email,
                        password=hash_password(password), role="admin"))
    db.session.commit()
    app.logger.info("Default admin created: %s", email)


def _register_handlers(app):

    @app.after_request
    def allow_cors(response):
        response.headers["Access-Control-Allow-Origin"] = app.config["CORS_ORIGIN"]
        response.headers["Access-Control-Allow-Headers"] = "Authorization, Content-Type"
        response.headers["Access-Control-Allow-Methods"] = "GET, POST, DELETE, OPTIONS"
        return response

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({"error": "Not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify({"error": "Method not allowed"}), 405

    @app.errorhandler(SQLAlchemyError)
    def database_error(e):
        return _server_error("Database error")

    @app.errorhandler(500)
    def internal_error(e):
        return jsonify({"error": "Internal server error"}), 500


def _register_cli(app):

    @app.cli.command("init-db")
    def init_db():
        """Create all tables."""
        db.create_all()
        click.echo("Database initialised")

    @app.cli.command("create-admin")
    @click.option("--name", default="Administrator")
    @click.option("--email", prompt=True)
    @click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
    def create_admin(name, email, password):
        """Create an admin account, or promote an existing user to admin."""
        user = User.query.filter_by(email=email).first()
        if user:
            user.role = "admin"
        else:
            db.session.add(User(name=name, email=email, password=hash_password(password), role="admin"))
        db.session.commit()
        click.echo(f"Admin ready: {email}")


def _store():
    return ReservationStore(db.session, current_app.config["HALL_VOCABULARY"])


def _bad_request(message):
    return jsonify({"error": message}), 400


def _server_error(message):
    db.session.rollback()
    current_app.logger.exception(message)
    return jsonify({"error": message}), 500


def _json_body():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _text(data, key):
    value = data.get(key)
    return value if isinstance(value, str) else ""


def _parse_date(value):
    try:
        return date.fromisoformat(value.strip())
    except (AttributeError, ValueError):
        return None


# Health check
@api.route("/")
def health():
    return jsonify({"message": "Hall Booking API is running", "status": "healthy"})


# --------------------------------------------------------------------------------------
# AUTH
# --------------------------------------------------------------------------------------
@api.route("/auth/signup", methods=["POST"])
def signup():
    data = _json_body()
    # SECURITY: Input sanitization
    name = _text(data, "name").strip()
    email = _text(data, "email").strip().lower()
    phone = _text(data, "phone").strip()
    password = _text(data, "password")

    if not name or not email or not password:
        return _bad_request("Name, email and password are required")

    if User.query.filter_by(email=email).first():
        return _bad_request("Email already registered")

    user = User(name=name, email=email, phone=phone or None, password=hash_password(password), role="user")
    try:
        db.session.add(user)
        db.session.commit()
    except SQLAlchemyError:
        return _server_error("Signup failed")

    current_app.logger.info("New user registered: %s", email)
    return jsonify({"token": generate_token(user), "user": user.to_dict()})


@api.route("/auth/login", methods=["POST"])
def login():
    data = _json_body()
    email = _text(data, "email").strip().lower()
    password = _text(data, "password")

    user = User.query.filter_by(email=email).first()
    if not user or not verify_password(user.password, password):
        return jsonify({"error": "Invalid credentials"}), 401
    return jsonify({"token": generate_token(user), "user": user.to_dict()})


# --------------------------------------------------------------------------------------
# BOOKINGS
# --------------------------------------------------------------------------------------
@api.route("/api/bookings", methods=["GET"])
@login_required
def my_bookings():
    bookings = _store().list_by_owner(g.identity.user_id)
    return jsonify([b.to_dict() for b in bookings])


@api.route("/api/bookings", methods=["POST"])
@login_required
def create_booking():
    data = _json_body()
    vocabulary = current_app.config["HALL_VOCABULARY"]

    # SECURITY: Basic input validation
    hall = vocabulary.hall_for(_text(data, "hall"))
    booking_date = _parse_date(data.get("date"))
    slots = data.get("slots") or []
    purpose = _text(data, "purpose").strip()

    if not hall:
        return _bad_request("Unknown hall")
    if not booking_date:
        return _bad_request("Date must be YYYY-MM-DD")
    if not isinstance(slots, list) or not slots:
        return _bad_request("Please select at least one time slot")
    unknown = [s for s in slots if not isinstance(s, str) or not vocabulary.is_slot(s)]
    if unknown:
        return _bad_request(f"Unknown slots: {', '.join(map(str, unknown))}")
    if not purpose:
        return _bad_request("Purpose is required")

    try:
        booking = _store().create(g.identity.user_id, hall, booking_date, slots, purpose)
    except BookingConflict as e:
        return jsonify({
            "error": "Some slots are already booked",
            "conflictSlots": list(e.conflict.overlap),
            "availableSlots": list(e.conflict.available),
        }), 400
    except SQLAlchemyError:
        return _server_error("Failed to create booking")

    current_app.logger.info("Booking %s created by user %s", booking.id, g.identity.user_id)
    return jsonify(booking.to_dict())


@api.route("/api/bookings/<int:booking_id>", methods=["DELETE"])
@login_required
def cancel_booking(booking_id):
    try:
        deleted = _store().delete(booking_id, g.identity.user_id)
    except SQLAlchemyError:
        return _server_error("Failed to cancel booking")
    # You can only cancel your own bookings
    if not deleted:
        return jsonify({"error": "Booking not found"}), 404
    return jsonify({"message": "Booking cancelled successfully"})


@api.route("/api/availability", methods=["GET"])
@login_required
def availability():
    vocabulary = current_app.config["HALL_VOCABULARY"]
    hall = vocabulary.hall_for(request.args.get("hall", ""))
    booking_date = _parse_date(request.args.get("date"))
    if not hall or not booking_date:
        return _bad_request("A known hall and a YYYY-MM-DD date are required")

    booked = _store().booked_slots(hall, booking_date)
    return jsonify({
        "hall": hall,
        "date": booking_date.isoformat(),
        "bookedSlots": list(booked),
        "availableSlots": [s for s in vocabulary.all_slots if s not in booked],
    })


# --------------------------------------------------------------------------------------
# AI CHAT
# --------------------------------------------------------------------------------------
@api.route("/api/ai-chat", methods=["POST"])
@login_required
def ai_chat():
    data = _json_body()
    message = _text(data, "message")
    assistant = current_app.extensions["booking_assistant"]
    reply = assistant.reply(message, g.identity, _store())
    return jsonify(reply.to_dict())


# --------------------------------------------------------------------------------------
# ADMIN
# --------------------------------------------------------------------------------------
@api.route("/admin/users", methods=["GET"])
@admin_required
def admin_users():
    users = User.query.order_by(User.created_at.desc(), User.id.desc()).all()
    return jsonify([u.to_dict() for u in users])


@api.route("/admin/users/<int:user_id>", methods=["DELETE"])
@admin_required
def admin_delete_user(user_id):
    user = db.get_or_404(User, user_id)
    if user.role == "admin":
        return jsonify({"error": "Cannot delete admin users"}), 403
    try:
        db.session.delete(user)
        db.session.commit()
    except SQLAlchemyError:
        return _server_error("Failed to delete user")
    current_app.logger.info("User %s deleted by admin %s", user_id, g.identity.user_id)
    return jsonify({"message": "User deleted successfully"})


# --------------------------------------------------------------------------------------
# FEEDBACK
# --------------------------------------------------------------------------------------
@api.route("/feedback", methods=["GET"])
@admin_required
def list_feedback():
    entries = Feedback.query.order_by(Feedback.created_at.desc(), Feedback.id.desc()).all()
    return jsonify([f.to_dict() for f in entries])


@api.route("/feedback/submit", methods=["POST"])
@login_required
def submit_feedback():
    data = _json_body()
    text = _text(data, "feedback").strip()
    if not text:
        return _bad_request("Feedback cannot be empty")

    entry = Feedback(user_id=g.identity.user_id, name=g.identity.name, feedback=text)
    try:
        db.session.add(entry)
        db.session.commit()
    except SQLAlchemyError:
        return _server_error("Failed to submit feedback")
    return jsonify(entry.to_dict())


@api.route("/feedback/<int:feedback_id>", methods=["DELETE"])
@admin_required
def delete_feedback(feedback_id):
    entry = db.get_or_404(Feedback, feedback_id)
    try:
        db.session.delete(entry)
        db.session.commit()
    except SQLAlchemyError:
        return _server_error("Failed to delete feedback")
    return jsonify({"message": "Feedback deleted successfully"})


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    create_app().run(host="0.0.0.0", port=int(os.environ.get("PORT", 5000)), debug=True)
