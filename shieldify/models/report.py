import uuid
from datetime import datetime

from sqlalchemy.orm import validates

from shieldify import db
from shieldify.constants import STATUS_PENDING
from shieldify.validation.payloads import payload_from_dict


class Report(db.Model):
    __tablename__ = 'reports'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    customer_id = db.Column(db.String(36), db.ForeignKey('user_profiles.id'), nullable=False, index=True)
    platform = db.Column(db.String(20), nullable=False)  # facebook, instagram, tiktok, youtube, threads, website
    report_type = db.Column(db.String(20), nullable=False)  # copyright, trademark, counterfeit, impersonator, other
    status = db.Column(db.String(20), nullable=False, default=STATUS_PENDING, index=True)  # pending, approved, rejected
    report_number = db.Column(db.String(100))  # assigned by an admin
    account_page_name = db.Column(db.String(255), nullable=False)
    infringing_urls = db.Column(db.JSON, nullable=False, default=list)
    description = db.Column(db.Text)
    form_payload = db.Column(db.JSON, nullable=False, default=dict)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    customer = db.relationship('UserProfile', back_populates='reports')

    @validates('customer_id', 'report_type')
    def _validate_immutable(self, key, value):
        current = getattr(self, key)
        if current is not None and current != value:
            raise ValueError(f'{key} cannot change once a report is created')
        return value

    @property
    def payload(self):
        """Typed form payload for this report's type."""
        return payload_from_dict(self.report_type, self.form_payload)

    def __repr__(self):
        return f'<Report {self.id} {self.report_type} - {self.status}>'
