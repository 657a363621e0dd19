from shieldify import create_app, db
import os

app = create_app()


@app.shell_context_processor
def make_shell_context():
    # Import models here to avoid circular imports
    from shieldify.models import Account, UserProfile, Report, ReportAuditLog

    return {'db': db, 'Account': Account, 'UserProfile': UserProfile,
            'Report': Report, 'ReportAuditLog': ReportAuditLog}


if __name__ == '__main__':
    with app.app_context():
        app.logger.info(f"Database: {app.config['SQLALCHEMY_DATABASE_URI']}")

        # Create tables
        db.create_all()

    debug = os.environ.get('FLASK_DEBUG', 'False').lower() in ['true', '1', 'on']
    app.run(debug=debug, host='0.0.0.0', port=5000)
