import csv
from io import StringIO

CSV_HEADER = [
    'report_id',
    'report_number',
    'status',
    'platform',
    'report_type',
    'account_page_name',
    'customer_email',
    'customer_name',
    'created_at',
    'updated_at',
]

EXPORT_FILENAME = 'reports_export.csv'


def _timestamp(value):
    return value.isoformat() if value else ''


def render_reports_csv(reports):
    """Serialize reports with their customer profile to CSV text."""
    output = StringIO()
    # Minimal quoting: fields with a comma, quote or newline are wrapped and quotes doubled
    writer = csv.writer(output, lineterminator='\n')

    writer.writerow(CSV_HEADER)
    for report in reports:
        customer = report.customer
        writer.writerow([
            report.id,
            report.report_number or '',
            report.status,
            report.platform,
            report.report_type,
            report.account_page_name,
            customer.email if customer else '',
            (customer.full_name or '') if customer else '',
            _timestamp(report.created_at),
            _timestamp(report.updated_at),
        ])

    return output.getvalue()
