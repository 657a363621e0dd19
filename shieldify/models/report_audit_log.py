import uuid
from datetime import datetime

from sqlalchemy import event

from shieldify import db


class ReportAuditLog(db.Model):
    __tablename__ = 'report_audit_logs'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    report_id = db.Column(db.String(36), db.ForeignKey('reports.id', ondelete='CASCADE'), nullable=False, index=True)
    actor_id = db.Column(db.String(36), db.ForeignKey('user_profiles.id'), nullable=False)
    action = db.Column(db.String(20), nullable=False)  # created, approved, rejected, updated
    note = db.Column(db.String(1000))
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    actor = db.relationship('UserProfile')

    def __repr__(self):
        return f'<ReportAuditLog {self.action} on {self.report_id}>'


@event.listens_for(ReportAuditLog, 'before_update')
def _refuse_audit_update(mapper, connection, target):
    raise ValueError('Audit log entries are append-only')
