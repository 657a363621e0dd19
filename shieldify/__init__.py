import logging
import os
from logging.handlers import RotatingFileHandler

from flask import Flask, render_template
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from flask_migrate import Migrate
from flask_cors import CORS

db = SQLAlchemy()
login_manager = LoginManager()
migrate = Migrate()

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(app):
    """Root logging setup; file output only outside tests."""
    logging.basicConfig(format=LOG_FORMAT, level=app.config.get('LOG_LEVEL', 'INFO'))

    if app.testing or not app.config.get('LOG_DIR'):
        return

    os.makedirs(app.config['LOG_DIR'], exist_ok=True)
    handler = RotatingFileHandler(
        os.path.join(app.config['LOG_DIR'], 'shieldify.log'),
        maxBytes=1_048_576,
        backupCount=5,
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.setLevel(app.config.get('LOG_LEVEL', 'INFO'))
    logging.getLogger('shieldify').addHandler(handler)


def create_app(test_config=None):
    app = Flask(__name__)
    app.config.from_object('config.Config')
    if test_config:
        app.config.update(test_config)

    configure_logging(app)

    # Extensions
    db.init_app(app)
    login_manager.init_app(app)
    migrate.init_app(app, db)
    CORS(app, resources={r'/api/*': {'origins': app.config['CORS_ORIGINS']}})

    # Login
    login_manager.login_view = 'auth.login'
    login_manager.login_message = 'Please sign in to continue.'

    from shieldify.models import Account

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(Account, user_id)

    from shieldify.utils.request_context import load_request_context
    app.before_request(load_request_context)

    from shieldify.utils.context_processor import inject_global_vars
    app.context_processor(inject_global_vars)

    # Blueprints
    from shieldify.routes import auth, customer, admin, api
    app.register_blueprint(auth.bp)
    app.register_blueprint(customer.bp)
    app.register_blueprint(admin.bp)
    app.register_blueprint(api.bp)

    @app.errorhandler(404)
    def not_found(error):
        return render_template('shared/not_found.html'), 404

    from shieldify.cli import register_commands
    register_commands(app)

    os.makedirs(app.instance_path, exist_ok=True)

    return app
