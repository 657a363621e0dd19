"""
Context processors exposing labels and the request identity to templates
"""
from shieldify.constants import PLATFORM_LABELS, REPORT_TYPE_LABELS, STATUS_LABELS
from shieldify.utils.request_context import get_request_context


def inject_global_vars():
    """Injects global variables into every template"""
    return {
        'request_context': get_request_context(),
        'platform_labels': PLATFORM_LABELS,
        'report_type_labels': REPORT_TYPE_LABELS,
        'status_labels': STATUS_LABELS,
    }
