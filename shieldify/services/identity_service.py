"""
Identity boundary: accounts, sign-in and the lazily created user profile.
"""
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from shieldify.constants import ROLE_CUSTOMER, VALID_ROLES
from shieldify.errors import PersistenceError, ValidationError
from shieldify.models import Account, UserProfile

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def _normalize_email(email):
    return (email or '').strip().lower()


def register_account(session, email, password, full_name=None):
    """Create an account; the profile is created on first authenticated request."""
    email = _normalize_email(email)
    errors = {}

    if not email or '@' not in email:
        errors['email'] = 'Enter a valid email'
    elif session.query(Account).filter_by(email=email).first():
        errors['email'] = 'Email already registered'

    if len(password or '') < MIN_PASSWORD_LENGTH:
        errors['password'] = f'Password must be at least {MIN_PASSWORD_LENGTH} characters'

    if errors:
        raise ValidationError(errors)

    account = Account(email=email, full_name=(full_name or '').strip() or None)
    account.set_password(password)
    session.add(account)
    try:
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error(f'Could not register {email}: {exc}')
        raise PersistenceError(str(exc)) from exc

    logger.info(f'Account registered: {account.id}')
    return account


def authenticate(session, email, password):
    """Return the account for a valid credential pair, else None."""
    account = session.query(Account).filter_by(email=_normalize_email(email)).first()
    if account and account.check_password(password):
        return account
    return None


def ensure_profile(session, account):
    """
    Return the profile for an account, creating a customer profile if absent.

    Two requests racing on the insert converge on the row that won; a store
    failure yields None, which callers treat as a non-admin identity.
    """
    profile = session.get(UserProfile, account.id)
    if profile is not None:
        return profile

    profile = UserProfile(
        id=account.id,
        email=account.email,
        full_name=account.full_name or account.email,
        role=ROLE_CUSTOMER,
    )
    session.add(profile)
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        profile = session.get(UserProfile, account.id)
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error(f'Profile bootstrap failed for {account.id}: {exc}')
        return None
    else:
        logger.info(f'Profile created for {account.id}')
    return profile


def set_role(session, email, role):
    """Change a profile's role by account email. Returns the profile."""
    if role not in VALID_ROLES:
        raise ValidationError({'role': f'Unknown role: {role}'})

    account = session.query(Account).filter_by(email=_normalize_email(email)).first()
    if account is None:
        raise ValidationError({'email': f'No account for {email}'})

    profile = ensure_profile(session, account)
    if profile is None:
        raise PersistenceError(f'Could not load profile for {email}')

    profile.role = role
    try:
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        raise PersistenceError(str(exc)) from exc

    logger.info(f'Role of {profile.id} set to {role}')
    return profile
