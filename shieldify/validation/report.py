"""
Report submission validation.

Every validator returns a ``ValidationResult`` instead of raising, so callers
can render one message per offending field. ``report_type`` picks exactly one
variant validator; fields that belong to other variants are never read.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple
from urllib.parse import urlsplit

from shieldify.constants import (
    VALID_PLATFORMS, VALID_REPORT_TYPES, MIN_TEXT_LENGTH,
    MAX_DESCRIPTION_LENGTH, MAX_NOTE_LENGTH, MAX_INFRINGING_URLS,
    REPORT_TYPE_COPYRIGHT, REPORT_TYPE_TRADEMARK, REPORT_TYPE_COUNTERFEIT,
    REPORT_TYPE_IMPERSONATOR, REPORT_TYPE_OTHER,
)
from shieldify.errors import ValidationError
from shieldify.validation.payloads import (
    CopyrightPayload, TrademarkPayload, CounterfeitPayload,
    ImpersonatorPayload, OtherPayload, ReportPayload,
)

LIST_FIELDS = ('infringing_urls', 'proof_links', 'evidence_links')


@dataclass
class ValidationResult:
    value: Any = None
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self):
        return not self.errors

    def unwrap(self):
        """Return the value or raise ``ValidationError`` with the field errors."""
        if self.errors:
            raise ValidationError(self.errors)
        return self.value


@dataclass(frozen=True)
class ReportSubmission:
    platform: str
    account_page_name: str
    infringing_urls: Tuple[str, ...]
    description: Optional[str]
    payload: ReportPayload

    @property
    def report_type(self):
        return self.payload.report_type


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------

def is_absolute_url(value):
    """True for URLs with a scheme and a host, e.g. ``https://example.com/x``."""
    if not value or any(ch.isspace() for ch in value):
        return False
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    return bool(parts.scheme) and bool(parts.hostname)


def _clean(value):
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _entries(value):
    """(index, text) pairs; textarea input skips blank lines but keeps line numbers."""
    if value is None:
        return []
    if isinstance(value, str):
        return [(index, line) for index, line in enumerate(value.splitlines()) if line.strip()]
    return [(index, '' if item is None else str(item)) for index, item in enumerate(value)]


def _required_text(fields, name, message, errors):
    value = _clean(fields.get(name))
    if value is None or len(value) < MIN_TEXT_LENGTH:
        errors[name] = message
    return value


def _link_list(fields, name, errors):
    links = []
    for index, raw in _entries(fields.get(name)):
        link = raw.strip()
        if not link:
            continue
        if not is_absolute_url(link):
            errors[f'{name}.{index}'] = 'Enter a valid URL'
            continue
        links.append(link)
    return tuple(links)


def fields_from_form(form):
    """Flatten a request MultiDict; repeated inputs become lists."""
    data = {}
    for key in form.keys():
        if key in LIST_FIELDS:
            values = form.getlist(key)
            data[key] = values[0] if len(values) == 1 else values
        else:
            data[key] = form.get(key)
    return data


# ---------------------------------------------------------------------------
# Variant validators
# ---------------------------------------------------------------------------

def validate_copyright(fields):
    errors = {}
    work = _required_text(fields, 'work_description', 'Describe the work', errors)
    proof_links = _link_list(fields, 'proof_links', errors)
    if errors:
        return ValidationResult(errors=errors)
    return ValidationResult(CopyrightPayload(work_description=work, proof_links=proof_links))


def validate_trademark(fields):
    errors = {}
    name = _required_text(fields, 'trademark_name', 'Trademark name required', errors)
    if errors:
        return ValidationResult(errors=errors)
    return ValidationResult(TrademarkPayload(
        trademark_name=name,
        registration_number=_clean(fields.get('registration_number')),
        jurisdiction=_clean(fields.get('jurisdiction')),
    ))


def validate_counterfeit(fields):
    errors = {}
    brand = _required_text(fields, 'brand', 'Brand required', errors)
    if errors:
        return ValidationResult(errors=errors)
    return ValidationResult(CounterfeitPayload(
        brand=brand,
        product_type=_clean(fields.get('product_type')),
    ))


def validate_impersonator(fields):
    errors = {}
    entity = _required_text(fields, 'impersonated_entity', 'Entity required', errors)
    evidence_links = _link_list(fields, 'evidence_links', errors)
    if errors:
        return ValidationResult(errors=errors)
    return ValidationResult(ImpersonatorPayload(impersonated_entity=entity, evidence_links=evidence_links))


def validate_other(fields):
    errors = {}
    details = _required_text(fields, 'other_details', 'Please describe the issue', errors)
    if errors:
        return ValidationResult(errors=errors)
    return ValidationResult(OtherPayload(other_details=details))


VARIANT_VALIDATORS = {
    REPORT_TYPE_COPYRIGHT: validate_copyright,
    REPORT_TYPE_TRADEMARK: validate_trademark,
    REPORT_TYPE_COUNTERFEIT: validate_counterfeit,
    REPORT_TYPE_IMPERSONATOR: validate_impersonator,
    REPORT_TYPE_OTHER: validate_other,
}


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------

def validate_infringing_urls(value):
    errors = {}
    entries = _entries(value)
    urls = []

    if not entries:
        errors['infringing_urls'] = 'Add at least one URL'
    elif len(entries) > MAX_INFRINGING_URLS:
        errors['infringing_urls'] = f'Limit {MAX_INFRINGING_URLS} URLs'

    for index, raw in entries:
        url = raw.strip()
        if not url:
            errors[f'infringing_urls.{index}'] = 'Required'
        elif not is_absolute_url(url):
            errors[f'infringing_urls.{index}'] = 'Enter a valid URL'
        else:
            urls.append(url)

    if errors:
        return ValidationResult(errors=errors)
    return ValidationResult(tuple(urls))


def validate_report_submission(fields):
    """Validate a flat field map into a ``ReportSubmission``."""
    errors = {}

    platform = _clean(fields.get('platform'))
    if platform not in VALID_PLATFORMS:
        errors['platform'] = 'Select a platform'

    account_page_name = _required_text(
        fields, 'account_page_name', 'Account/Page name is required', errors,
    )

    urls = validate_infringing_urls(fields.get('infringing_urls'))
    errors.update(urls.errors)

    description = _clean(fields.get('description'))
    if description and len(description) > MAX_DESCRIPTION_LENGTH:
        errors['description'] = f'Keep the description under {MAX_DESCRIPTION_LENGTH} characters'

    report_type = _clean(fields.get('report_type'))
    payload = None
    if report_type not in VALID_REPORT_TYPES:
        errors['report_type'] = 'Select a report type'
    else:
        variant = VARIANT_VALIDATORS[report_type](fields)
        errors.update(variant.errors)
        payload = variant.value

    if errors:
        return ValidationResult(errors=errors)

    return ValidationResult(ReportSubmission(
        platform=platform,
        account_page_name=account_page_name,
        infringing_urls=urls.value,
        description=description,
        payload=payload,
    ))


def validate_report_number(value):
    number = _clean(value)
    if number is None or len(number) < MIN_TEXT_LENGTH:
        return ValidationResult(errors={'report_number': 'Report number is required'})
    return ValidationResult(number)


def validate_note(value):
    note = _clean(value)
    if note and len(note) > MAX_NOTE_LENGTH:
        return ValidationResult(errors={'note': f'Keep the note under {MAX_NOTE_LENGTH} characters'})
    return ValidationResult(note)
