from functools import wraps
from flask import redirect, url_for, flash, jsonify, request
from flask_login import current_user

from shieldify.utils.request_context import get_request_context


def home_for(context):
    """Role home: admin list for admins, customer dashboard otherwise."""
    return url_for('admin.index') if context.is_admin else url_for('customer.index')


def admin_required(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            return redirect(url_for('auth.login', next=request.path))

        if not get_request_context().is_admin:
            flash('Access denied. Administrators only.', 'error')
            return redirect(url_for('customer.index'))

        return f(*args, **kwargs)
    return decorated_function


def api_admin_required(f):
    """JSON variant of admin_required for the export API."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        context = get_request_context()
        if not context.is_authenticated:
            return jsonify({'error': 'Authentication required'}), 401
        if not context.is_admin:
            return jsonify({'error': 'Administrators only'}), 403
        return f(*args, **kwargs)
    return decorated_function


def redirect_if_authenticated(f):
    """Sign-in and registration pages send signed-in users to their home."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        context = get_request_context()
        if context.is_authenticated:
            return redirect(home_for(context))
        return f(*args, **kwargs)
    return decorated_function
