from flask import Flask, jsonify
from .extensions import db, login_manager, migrate, rq


def create_app(config_object='config.Config'):
    """App factory: JSON API only, bearer-token auth."""
    app = Flask(__name__)
    app.config.from_object(config_object)

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    rq.init_app(app)

    from .services.openai_wrap import RecommendationClient, AnalysisClient
    from .services.improvement import PlanAccumulator

    # vendor clients and the accumulator are configured once, here
    recommender = RecommendationClient(
        api_key=app.config.get('OPENAI_API_KEY'),
        model=app.config.get('OPENAI_MODEL', 'gpt-4o-mini'),
        use_mock=app.config.get('USE_MOCK_AI', False),
        timeout=app.config.get('VENDOR_TIMEOUT', 30),
        max_attempts=app.config.get('VENDOR_MAX_ATTEMPTS', 3),
    )
    app.extensions['analysis_client'] = AnalysisClient(
        api_key=app.config.get('OPENAI_API_KEY'),
        model=app.config.get('OPENAI_MODEL', 'gpt-4o-mini'),
        use_mock=app.config.get('USE_MOCK_AI', False),
        timeout=app.config.get('VENDOR_TIMEOUT', 30) * 2,
        max_attempts=app.config.get('VENDOR_MAX_ATTEMPTS', 3),
    )
    app.extensions['plan_accumulator'] = PlanAccumulator(
        recommender=recommender,
        max_retries=app.config.get('PLAN_MAX_RETRIES', 3),
    )

    @login_manager.request_loader
    def load_user_from_request(req):
        from .models.user import User
        from .utils.tokens import token_from_header, verify_token
        token = token_from_header(req.headers.get('Authorization'))
        if not token:
            return None
        user_id = verify_token(token)
        if user_id is None:
            return None
        return db.session.get(User, user_id)

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({"error": "unauthorized", "message": "Authentication required"}), 401

    from .errors import register_error_handlers
    register_error_handlers(app)

    from .blueprints.auth import bp as auth_bp
    from .blueprints.interviews import bp as interviews_bp
    from .blueprints.feedback import bp as feedback_bp
    from .blueprints.questions import bp as questions_bp
    app.register_blueprint(auth_bp, url_prefix="/api")
    app.register_blueprint(interviews_bp, url_prefix="/api/interviews")
    app.register_blueprint(feedback_bp, url_prefix="/api/interviews")
    app.register_blueprint(questions_bp, url_prefix="/api/questions")

    @app.get('/')
    def index():
        return jsonify({"ok": True, "service": "careerzoom"})

    return app
