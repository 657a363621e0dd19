from flask import Blueprint, render_template, redirect, url_for, flash, request, current_app
from flask_login import login_required

from shieldify import db
from shieldify.constants import PLATFORM_LABELS, REPORT_TYPE_LABELS, STATUS_LABELS
from shieldify.errors import AuthorizationError, PersistenceError, ReportNotFound, ValidationError
from shieldify.services.audit_log import list_audit_entries
from shieldify.services.report_lifecycle import ReportLifecycle
from shieldify.services.report_query import ReportFilters, list_reports
from shieldify.services.report_service import get_report_for_context
from shieldify.utils.decorators import admin_required
from shieldify.utils.request_context import get_request_context

bp = Blueprint('admin', __name__, url_prefix='/admin')

FILTER_KEYS = ('q', 'email', 'status', 'platform', 'report_type', 'created_from', 'created_to', 'sort')


def _filter_args():
    """Current non-empty filter values, for form state and pagination links"""
    return {key: request.args[key] for key in FILTER_KEYS if request.args.get(key)}


@bp.route('/')
@login_required
@admin_required
def index():
    """Admin report list with search, filters and pagination"""
    context = get_request_context()
    filters = ReportFilters.from_args(request.args)

    try:
        page = list_reports(db.session, context, filters, page_size=current_app.config['ADMIN_PAGE_SIZE'])
    except PersistenceError as e:
        flash(f'Could not load reports: {e.message}', 'error')
        return render_template('admin/index.html', page=None, filter_args=_filter_args(),
                               platforms=PLATFORM_LABELS, report_types=REPORT_TYPE_LABELS,
                               statuses=STATUS_LABELS), 503

    return render_template('admin/index.html',
                           page=page,
                           filter_args=_filter_args(),
                           platforms=PLATFORM_LABELS,
                           report_types=REPORT_TYPE_LABELS,
                           statuses=STATUS_LABELS)


@bp.route('/reports/<report_id>')
@login_required
@admin_required
def report_detail(report_id):
    context = get_request_context()
    try:
        report = get_report_for_context(db.session, context, report_id)
        logs = list_audit_entries(db.session, report.id)
    except ReportNotFound:
        return render_template('shared/not_found.html',
                               message='Missing or invalid report ID.',
                               back_url=url_for('admin.index')), 404
    except PersistenceError as e:
        flash(f'Unable to load report: {e.message}', 'error')
        return redirect(url_for('admin.index'))

    return render_template('admin/report_detail.html', report=report, logs=logs)


def _run_transition(report_id, operation, success_message, **kwargs):
    """Apply one lifecycle operation and flash the outcome"""
    lifecycle = ReportLifecycle(db.session, get_request_context())
    try:
        result = getattr(lifecycle, operation)(report_id, **kwargs)
    except ValidationError as e:
        for message in e.errors.values():
            flash(message, 'error')
    except ReportNotFound:
        flash('Report not found.', 'error')
        return redirect(url_for('admin.index'))
    except (AuthorizationError, PersistenceError) as e:
        flash(f'Update failed: {e.message}', 'error')
    else:
        flash(success_message, 'success')
        if not result.audited:
            flash('The change was saved but could not be recorded in the audit log.', 'warning')

    return redirect(url_for('admin.report_detail', report_id=report_id))


@bp.route('/reports/<report_id>/approve', methods=['POST'])
@login_required
@admin_required
def approve(report_id):
    return _run_transition(report_id, 'approve', 'Report approved. Report number shared with the customer.',
                           number=request.form.get('report_number'))


@bp.route('/reports/<report_id>/assign-number', methods=['POST'])
@login_required
@admin_required
def assign_number(report_id):
    return _run_transition(report_id, 'assign_number', 'Report number assigned.',
                           number=request.form.get('report_number'))


@bp.route('/reports/<report_id>/reject', methods=['POST'])
@login_required
@admin_required
def reject(report_id):
    return _run_transition(report_id, 'reject', 'Report rejected.',
                           note=request.form.get('note'))


@bp.route('/reports/<report_id>/pending', methods=['POST'])
@login_required
@admin_required
def reset_to_pending(report_id):
    return _run_transition(report_id, 'reset_to_pending', 'Status updated to pending.',
                           note=request.form.get('note'))
