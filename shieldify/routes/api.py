import logging

from flask import Blueprint, Response, jsonify, request, current_app

from shieldify import db
from shieldify.errors import PersistenceError
from shieldify.services.csv_export import EXPORT_FILENAME, render_reports_csv
from shieldify.services.report_query import ReportFilters, export_reports
from shieldify.utils.decorators import api_admin_required
from shieldify.utils.request_context import get_request_context

logger = logging.getLogger(__name__)

bp = Blueprint('api', __name__, url_prefix='/api')


@bp.route('/admin/reports/export')
@api_admin_required
def export_admin_reports():
    """Export the filtered admin report list as CSV"""
    context = get_request_context()
    filters = ReportFilters.from_args(request.args)

    try:
        reports = export_reports(db.session, context, filters, limit=current_app.config['EXPORT_LIMIT'])
    except PersistenceError as e:
        return jsonify({'error': e.message or 'Unable to export'}), 500

    logger.info(f'Export of {len(reports)} reports by {context.user_id}')
    return Response(
        render_reports_csv(reports),
        mimetype='text/csv',
        headers={
            'Content-Disposition': f'attachment; filename="{EXPORT_FILENAME}"'
        }
    )
