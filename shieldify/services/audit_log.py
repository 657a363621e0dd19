"""
Append-only audit trail for reports.

Entries are committed on their own; a failed insert is logged and reported
as ``None`` so the state change that preceded it stands.
"""
import logging

from sqlalchemy.exc import SQLAlchemyError

from shieldify.errors import PersistenceError
from shieldify.models import ReportAuditLog

logger = logging.getLogger(__name__)


def append_audit_entry(session, report_id, actor_id, action, note=None):
    """Insert one audit entry. Returns the entry, or None if the insert failed."""
    entry = ReportAuditLog(report_id=report_id, actor_id=actor_id, action=action, note=note)
    session.add(entry)
    try:
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        logger.warning(f'Audit entry "{action}" for report {report_id} was not recorded: {exc}')
        return None
    return entry


def list_audit_entries(session, report_id):
    """Entries for a report, newest first."""
    try:
        return session.query(ReportAuditLog).filter_by(report_id=report_id).order_by(
            ReportAuditLog.created_at.desc(),
            ReportAuditLog.id.asc(),
        ).all()
    except SQLAlchemyError as exc:
        logger.error(f'Could not load audit log for report {report_id}: {exc}')
        raise PersistenceError(str(exc)) from exc
