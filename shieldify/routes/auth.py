import logging

from flask import Blueprint, render_template, redirect, url_for, flash, request
from flask_login import login_user, logout_user, login_required

from shieldify import db
from shieldify.errors import ShieldifyError, ValidationError
from shieldify.services.identity_service import authenticate, ensure_profile, register_account
from shieldify.utils.decorators import home_for, redirect_if_authenticated
from shieldify.utils.request_context import RequestContext, get_request_context
from shieldify.utils.security import is_safe_url

logger = logging.getLogger(__name__)

bp = Blueprint('auth', __name__)


def _home_after_sign_in(account):
    profile = ensure_profile(db.session, account)
    context = RequestContext.for_profile(profile) if profile else RequestContext(user_id=account.id)
    return home_for(context)


@bp.route('/')
def index():
    """Landing: role home when signed in, sign-in page otherwise"""
    context = get_request_context()
    if context.is_authenticated:
        return redirect(home_for(context))
    return redirect(url_for('auth.login'))


@bp.route('/login', methods=['GET', 'POST'])
@redirect_if_authenticated
def login():
    if request.method == 'POST':
        email = request.form.get('email', '')
        password = request.form.get('password', '')

        account = authenticate(db.session, email, password)
        if account:
            login_user(account, remember=True)
            logger.info(f'Sign-in: {account.id}')
            next_page = request.args.get('next')
            if next_page and is_safe_url(next_page):
                return redirect(next_page)
            return redirect(_home_after_sign_in(account))

        flash('Invalid email or password', 'error')

    return render_template('auth/login.html')


@bp.route('/register', methods=['GET', 'POST'])
@redirect_if_authenticated
def register():
    errors = {}
    if request.method == 'POST':
        try:
            account = register_account(
                db.session,
                email=request.form.get('email'),
                password=request.form.get('password'),
                full_name=request.form.get('full_name'),
            )
        except ValidationError as e:
            errors = e.errors
        except ShieldifyError as e:
            flash(f'Could not create account: {e.message}', 'error')
        else:
            login_user(account)
            flash('Account created.', 'success')
            return redirect(_home_after_sign_in(account))

    return render_template('auth/register.html', errors=errors, form=request.form), 400 if errors else 200


@bp.route('/logout')
@login_required
def logout():
    logout_user()
    flash('You have been signed out.', 'info')
    return redirect(url_for('auth.login'))
