"""
Per-request identity.

``load_request_context`` runs before every request and stores a
``RequestContext`` on ``flask.g``; routes pass it explicitly to services.
"""
from dataclasses import dataclass
from typing import Optional

from flask import g
from flask_login import current_user

from shieldify import db
from shieldify.constants import ROLE_ADMIN


@dataclass(frozen=True)
class RequestContext:
    user_id: Optional[str] = None
    email: Optional[str] = None
    full_name: Optional[str] = None
    role: Optional[str] = None

    @property
    def is_authenticated(self):
        return self.user_id is not None

    @property
    def is_admin(self):
        return self.is_authenticated and self.role == ROLE_ADMIN

    @classmethod
    def anonymous(cls):
        return cls()

    @classmethod
    def for_profile(cls, profile):
        return cls(user_id=profile.id, email=profile.email, full_name=profile.full_name, role=profile.role)


def load_request_context():
    from shieldify.services.identity_service import ensure_profile

    if not current_user.is_authenticated:
        g.request_context = RequestContext.anonymous()
        return

    account = current_user._get_current_object()
    profile = ensure_profile(db.session, account)
    if profile is None:
        g.request_context = RequestContext(
            user_id=account.id, email=account.email, full_name=account.full_name,
        )
    else:
        g.request_context = RequestContext.for_profile(profile)


def get_request_context():
    return g.get('request_context') or RequestContext.anonymous()
