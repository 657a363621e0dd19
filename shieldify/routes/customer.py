from flask import Blueprint, render_template, redirect, url_for, flash, request, current_app
from flask_login import login_required

from shieldify import db
from shieldify.constants import PLATFORM_LABELS, REPORT_TYPE_LABELS, REPORT_TYPE_COPYRIGHT
from shieldify.errors import PersistenceError, ReportNotFound, ValidationError
from shieldify.services.audit_log import list_audit_entries
from shieldify.services.report_query import ReportFilters, list_reports
from shieldify.services.report_service import get_report_for_context, report_counts, submit_report
from shieldify.utils.request_context import get_request_context
from shieldify.validation.report import fields_from_form

bp = Blueprint('customer', __name__, url_prefix='/app')


@bp.route('/')
@login_required
def index():
    """Customer dashboard: own reports, newest first"""
    context = get_request_context()
    filters = ReportFilters(page=ReportFilters.from_args(request.args).page)

    try:
        page = list_reports(db.session, context, filters, page_size=current_app.config['CUSTOMER_PAGE_SIZE'])
        counts = report_counts(db.session, context)
    except PersistenceError as e:
        flash(f'Could not load reports: {e.message}', 'error')
        return render_template('customer/index.html', page=None, counts=None), 503

    return render_template('customer/index.html', page=page, counts=counts)


@bp.route('/reports/new', methods=['GET', 'POST'])
@login_required
def new_report():
    """Submit a takedown report"""
    context = get_request_context()
    errors = {}
    values = {'report_type': REPORT_TYPE_COPYRIGHT}

    if request.method == 'POST':
        values = fields_from_form(request.form)
        try:
            report = submit_report(db.session, context, values)
        except ValidationError as e:
            errors = e.errors
        except PersistenceError as e:
            flash(f'Could not create report: {e.message}', 'error')
        else:
            flash('Report submitted. Status is pending; an admin will assign a report number upon approval.', 'success')
            return redirect(url_for('customer.report_detail', report_id=report.id))

    return render_template(
        'customer/report_form.html',
        values=values,
        errors=errors,
        platforms=PLATFORM_LABELS,
        report_types=REPORT_TYPE_LABELS,
    ), 400 if errors else 200


@bp.route('/reports/<report_id>')
@login_required
def report_detail(report_id):
    context = get_request_context()
    try:
        report = get_report_for_context(db.session, context, report_id)
        logs = list_audit_entries(db.session, report.id)
    except ReportNotFound:
        return render_template(
            'shared/not_found.html',
            message='This report may not belong to your account.',
            back_url=url_for('customer.index'),
        ), 404
    except PersistenceError as e:
        flash(f'Unable to load report: {e.message}', 'error')
        return redirect(url_for('customer.index'))

    return render_template('customer/report_detail.html', report=report, logs=logs)
