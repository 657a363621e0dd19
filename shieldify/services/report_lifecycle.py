"""
Report lifecycle: admin status transitions paired with audit entries.

States are pending, approved and rejected. Every state is reachable from
every other one through an explicit admin action. The report row is
committed first; the audit entry follows in its own commit and may be lost
without undoing the transition. Concurrent transitions on one report are
last-write-wins.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from shieldify.constants import (
    STATUS_APPROVED, STATUS_REJECTED, STATUS_PENDING,
    ACTION_APPROVED, ACTION_REJECTED, ACTION_UPDATED,
)
from shieldify.errors import AuthorizationError, PersistenceError, ReportNotFound
from shieldify.models import Report, ReportAuditLog
from shieldify.services.audit_log import append_audit_entry
from shieldify.validation.report import validate_note, validate_report_number

logger = logging.getLogger(__name__)

DEFAULT_PENDING_NOTE = 'Status set to pending'


@dataclass
class TransitionResult:
    report: Report
    audit_entry: Optional[ReportAuditLog]

    @property
    def audited(self):
        return self.audit_entry is not None


class ReportLifecycle:
    """Admin operations on a report, bound to one session and one request identity."""

    def __init__(self, session, context):
        self.session = session
        self.context = context

    def assign_number(self, report_id, number):
        """Set the report number without touching the status."""
        self._require_admin('assign_number')
        number = validate_report_number(number).unwrap()
        return self._transition(
            report_id,
            {'report_number': number},
            ACTION_UPDATED,
            f'Assigned report number: {number}',
        )

    def approve(self, report_id, number):
        """Approve and set the report number in the same write."""
        self._require_admin('approve')
        number = validate_report_number(number).unwrap()
        return self._transition(
            report_id,
            {'status': STATUS_APPROVED, 'report_number': number},
            ACTION_APPROVED,
            f'Report number: {number}',
        )

    def reject(self, report_id, note=None):
        self._require_admin('reject')
        note = validate_note(note).unwrap()
        return self._transition(report_id, {'status': STATUS_REJECTED}, ACTION_REJECTED, note)

    def reset_to_pending(self, report_id, note=None):
        """Move back to pending; an assigned report number is kept."""
        self._require_admin('reset_to_pending')
        note = validate_note(note).unwrap()
        return self._transition(
            report_id,
            {'status': STATUS_PENDING},
            ACTION_UPDATED,
            note or DEFAULT_PENDING_NOTE,
        )

    # ------------------------------------------------------------------

    def _require_admin(self, operation):
        if not self.context.is_admin:
            logger.warning(f'Refused {operation} for non-admin identity {self.context.user_id}')
            raise AuthorizationError('Administrators only')

    def _load(self, report_id):
        try:
            report = self.session.get(Report, report_id)
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise PersistenceError(str(exc)) from exc
        if report is None:
            raise ReportNotFound(report_id)
        return report

    def _transition(self, report_id, changes, action, note):
        report = self._load(report_id)
        for key, value in changes.items():
            setattr(report, key, value)

        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error(f'Transition "{action}" failed for report {report_id}: {exc}')
            raise PersistenceError(str(exc)) from exc

        logger.info(f'Report {report_id}: {action} by {self.context.user_id} ({changes})')
        entry = append_audit_entry(self.session, report.id, self.context.user_id, action, note)
        return TransitionResult(report=report, audit_entry=entry)
