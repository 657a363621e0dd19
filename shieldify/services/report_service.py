"""
Report submission and scoped reads.
"""
import logging

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from shieldify.constants import ACTION_CREATED, STATUS_PENDING, VALID_STATUSES
from shieldify.errors import AuthorizationError, PersistenceError, ReportNotFound
from shieldify.models import Report
from shieldify.services.audit_log import append_audit_entry
from shieldify.validation.report import validate_report_submission

logger = logging.getLogger(__name__)


def submit_report(session, context, fields):
    """
    Validate and store a new report for the calling customer.

    Raises ValidationError before anything is written. The report starts as
    pending with no number; a "created" audit entry follows.
    """
    if not context.is_authenticated:
        raise AuthorizationError('Sign in to submit reports')

    submission = validate_report_submission(fields).unwrap()

    report = Report(
        customer_id=context.user_id,
        platform=submission.platform,
        report_type=submission.report_type,
        status=STATUS_PENDING,
        report_number=None,
        account_page_name=submission.account_page_name,
        infringing_urls=list(submission.infringing_urls),
        description=submission.description,
        form_payload=submission.payload.to_dict(),
    )
    session.add(report)
    try:
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error(f'Could not store report for {context.user_id}: {exc}')
        raise PersistenceError(str(exc)) from exc

    logger.info(f'Report {report.id} submitted by {context.user_id} ({report.report_type}/{report.platform})')
    append_audit_entry(session, report.id, context.user_id, ACTION_CREATED)
    return report


def get_report_for_context(session, context, report_id):
    """
    Load a report visible to the caller.

    Customers only see their own reports; anything outside the caller's
    scope is reported as missing.
    """
    if not context.is_authenticated or not report_id:
        raise ReportNotFound(report_id)

    query = session.query(Report).filter(Report.id == report_id)
    if not context.is_admin:
        query = query.filter(Report.customer_id == context.user_id)

    try:
        report = query.first()
    except SQLAlchemyError as exc:
        session.rollback()
        raise PersistenceError(str(exc)) from exc

    if report is None:
        raise ReportNotFound(report_id)
    return report


def report_counts(session, context):
    """Per-status totals within the caller's scope, plus 'total'."""
    query = session.query(Report.status, func.count(Report.id))
    if not context.is_admin:
        query = query.filter(Report.customer_id == context.user_id)
    query = query.group_by(Report.status)

    try:
        rows = query.all()
    except SQLAlchemyError as exc:
        session.rollback()
        raise PersistenceError(str(exc)) from exc

    counts = {status: 0 for status in VALID_STATUSES}
    counts.update({status: count for status, count in rows})
    counts['total'] = sum(count for _, count in rows)
    return counts
