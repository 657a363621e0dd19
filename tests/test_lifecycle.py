# tests/test_lifecycle.py
"""
Tests for admin transitions and their audit entries
"""
import pytest
from types import SimpleNamespace
from unittest.mock import MagicMock

from sqlalchemy.exc import SQLAlchemyError

from shieldify.errors import AuthorizationError, PersistenceError, ReportNotFound, ValidationError
from shieldify.models import Report, ReportAuditLog
from shieldify.services import report_lifecycle
from shieldify.services.report_lifecycle import DEFAULT_PENDING_NOTE, ReportLifecycle
from shieldify.utils.request_context import RequestContext


def audit_entries(db, report):
    return db.session.query(ReportAuditLog).filter_by(report_id=report.id).all()


class TestApprove:

    def test_approve_sets_status_and_number(self, app_context, db, admin_context, admin_user, report):
        result = ReportLifecycle(db.session, admin_context).approve(report.id, 'TK-2024-0012')

        assert result.audited
        assert result.report.status == 'approved'
        assert result.report.report_number == 'TK-2024-0012'
        assert result.audit_entry.action == 'approved'
        assert result.audit_entry.note == 'Report number: TK-2024-0012'
        assert result.audit_entry.actor_id == admin_user.id

    def test_approving_twice_converges(self, app_context, db, admin_context, report):
        lifecycle = ReportLifecycle(db.session, admin_context)
        lifecycle.approve(report.id, 'TK-1')
        lifecycle.approve(report.id, 'TK-1')

        stored = db.session.get(Report, report.id)
        assert stored.status == 'approved'
        assert stored.report_number == 'TK-1'
        entries = audit_entries(db, report)
        assert [e.action for e in entries] == ['approved', 'approved']

    def test_number_is_required(self, app_context, db, admin_context, report):
        with pytest.raises(ValidationError) as exc_info:
            ReportLifecycle(db.session, admin_context).approve(report.id, '   ')

        assert exc_info.value.errors == {'report_number': 'Report number is required'}
        assert db.session.get(Report, report.id).status == 'pending'
        assert audit_entries(db, report) == []


class TestOtherTransitions:

    def test_assign_number_keeps_status(self, app_context, db, admin_context, report):
        result = ReportLifecycle(db.session, admin_context).assign_number(report.id, ' IG-77 ')

        assert result.report.status == 'pending'
        assert result.report.report_number == 'IG-77'
        assert result.audit_entry.action == 'updated'
        assert result.audit_entry.note == 'Assigned report number: IG-77'

    def test_reject_with_note(self, app_context, db, admin_context, report):
        result = ReportLifecycle(db.session, admin_context).reject(report.id, 'Not enough evidence')

        assert result.report.status == 'rejected'
        assert result.audit_entry.action == 'rejected'
        assert result.audit_entry.note == 'Not enough evidence'

    def test_reject_blank_note_stored_as_none(self, app_context, db, admin_context, report):
        result = ReportLifecycle(db.session, admin_context).reject(report.id, '  ')
        assert result.audit_entry.note is None

    def test_reject_note_limit(self, app_context, db, admin_context, report):
        with pytest.raises(ValidationError):
            ReportLifecycle(db.session, admin_context).reject(report.id, 'x' * 1001)
        assert db.session.get(Report, report.id).status == 'pending'

    def test_reset_to_pending_default_note(self, app_context, db, admin_context, report):
        lifecycle = ReportLifecycle(db.session, admin_context)
        lifecycle.approve(report.id, 'TK-9')
        result = lifecycle.reset_to_pending(report.id)

        assert result.report.status == 'pending'
        assert result.report.report_number == 'TK-9'
        assert result.audit_entry.action == 'updated'
        assert result.audit_entry.note == DEFAULT_PENDING_NOTE

    def test_every_state_reachable(self, app_context, db, admin_context, report):
        lifecycle = ReportLifecycle(db.session, admin_context)
        assert lifecycle.reject(report.id).report.status == 'rejected'
        assert lifecycle.approve(report.id, 'N-1').report.status == 'approved'
        assert lifecycle.reject(report.id).report.status == 'rejected'
        assert lifecycle.reset_to_pending(report.id).report.status == 'pending'
        assert lifecycle.approve(report.id, 'N-2').report.status == 'approved'
        assert len(audit_entries(db, report)) == 5


class TestRefusals:

    def test_customer_cannot_transition(self, app_context, db, customer_context, report):
        lifecycle = ReportLifecycle(db.session, customer_context)
        for call in (
            lambda: lifecycle.approve(report.id, 'TK-1'),
            lambda: lifecycle.assign_number(report.id, 'TK-1'),
            lambda: lifecycle.reject(report.id, 'no'),
            lambda: lifecycle.reset_to_pending(report.id),
        ):
            with pytest.raises(AuthorizationError):
                call()

        stored = db.session.get(Report, report.id)
        assert stored.status == 'pending'
        assert stored.report_number is None
        assert audit_entries(db, report) == []

    def test_authorization_checked_before_validation(self, app_context, db, customer_context, report):
        with pytest.raises(AuthorizationError):
            ReportLifecycle(db.session, customer_context).approve(report.id, '')

    def test_anonymous_refused(self, app_context, db, report):
        with pytest.raises(AuthorizationError):
            ReportLifecycle(db.session, RequestContext.anonymous()).reject(report.id)

    def test_missing_report(self, app_context, db, admin_context):
        with pytest.raises(ReportNotFound):
            ReportLifecycle(db.session, admin_context).approve('does-not-exist', 'TK-1')


class TestFailures:

    def test_audit_failure_keeps_transition(self, app_context, db, admin_context, report, monkeypatch):
        monkeypatch.setattr(report_lifecycle, 'append_audit_entry', lambda *args, **kwargs: None)

        result = ReportLifecycle(db.session, admin_context).approve(report.id, 'TK-5')

        assert not result.audited
        assert db.session.get(Report, report.id).status == 'approved'
        assert audit_entries(db, report) == []

    def test_status_write_failure_skips_audit(self):
        stored = SimpleNamespace(id='r-1', status='pending', report_number=None)
        session = MagicMock()
        session.get.return_value = stored
        session.commit.side_effect = SQLAlchemyError('database is locked')
        context = RequestContext(user_id='admin-1', role='admin')

        with pytest.raises(PersistenceError):
            ReportLifecycle(session, context).approve('r-1', 'TK-1')

        session.rollback.assert_called_once()
        session.add.assert_not_called()
