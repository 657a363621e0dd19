from datetime import datetime

from shieldify import db
from shieldify.constants import ROLE_ADMIN, ROLE_CUSTOMER


class UserProfile(db.Model):
    __tablename__ = 'user_profiles'

    id = db.Column(db.String(36), db.ForeignKey('accounts.id', ondelete='CASCADE'), primary_key=True)
    role = db.Column(db.String(20), nullable=False, default=ROLE_CUSTOMER)  # admin, customer
    email = db.Column(db.String(255), nullable=False)
    full_name = db.Column(db.String(255))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    reports = db.relationship('Report', back_populates='customer', lazy='dynamic')

    @property
    def is_admin(self):
        return self.role == ROLE_ADMIN

    @property
    def display_name(self):
        return self.full_name or self.email

    def __repr__(self):
        return f'<UserProfile {self.email} ({self.role})>'
