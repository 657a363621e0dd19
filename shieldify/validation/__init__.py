from .payloads import (
    CopyrightPayload, TrademarkPayload, CounterfeitPayload,
    ImpersonatorPayload, OtherPayload, PAYLOAD_TYPES, payload_from_dict,
)
from .report import (
    ValidationResult, ReportSubmission, is_absolute_url, validate_infringing_urls,
    validate_report_submission, validate_report_number, validate_note, fields_from_form,
)

__all__ = [
    'CopyrightPayload', 'TrademarkPayload', 'CounterfeitPayload',
    'ImpersonatorPayload', 'OtherPayload', 'PAYLOAD_TYPES', 'payload_from_dict',
    'ValidationResult', 'ReportSubmission', 'is_absolute_url', 'validate_infringing_urls',
    'validate_report_submission', 'validate_report_number', 'validate_note', 'fields_from_form',
]
