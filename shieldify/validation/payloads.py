"""
Type-specific report payloads.

Each report type owns exactly one payload class; ``report_type`` is the
discriminant and ``to_dict`` produces the JSON stored in ``form_payload``.
"""
from dataclasses import dataclass, fields
from typing import ClassVar, Optional, Tuple, Union

from shieldify.constants import (
    REPORT_TYPE_COPYRIGHT, REPORT_TYPE_TRADEMARK, REPORT_TYPE_COUNTERFEIT,
    REPORT_TYPE_IMPERSONATOR, REPORT_TYPE_OTHER,
)


class _PayloadMixin:
    report_type: ClassVar[str]
    link_fields: ClassVar[Tuple[str, ...]] = ()

    def to_dict(self) -> dict:
        data = {}
        for field in fields(self):
            value = getattr(self, field.name)
            data[field.name] = list(value) if field.name in self.link_fields else value
        return data


@dataclass(frozen=True)
class CopyrightPayload(_PayloadMixin):
    report_type: ClassVar[str] = REPORT_TYPE_COPYRIGHT
    link_fields: ClassVar[Tuple[str, ...]] = ('proof_links',)

    work_description: str
    proof_links: Tuple[str, ...] = ()


@dataclass(frozen=True)
class TrademarkPayload(_PayloadMixin):
    report_type: ClassVar[str] = REPORT_TYPE_TRADEMARK

    trademark_name: str
    registration_number: Optional[str] = None
    jurisdiction: Optional[str] = None


@dataclass(frozen=True)
class CounterfeitPayload(_PayloadMixin):
    report_type: ClassVar[str] = REPORT_TYPE_COUNTERFEIT

    brand: str
    product_type: Optional[str] = None


@dataclass(frozen=True)
class ImpersonatorPayload(_PayloadMixin):
    report_type: ClassVar[str] = REPORT_TYPE_IMPERSONATOR
    link_fields: ClassVar[Tuple[str, ...]] = ('evidence_links',)

    impersonated_entity: str
    evidence_links: Tuple[str, ...] = ()


@dataclass(frozen=True)
class OtherPayload(_PayloadMixin):
    report_type: ClassVar[str] = REPORT_TYPE_OTHER

    other_details: str


ReportPayload = Union[
    CopyrightPayload, TrademarkPayload, CounterfeitPayload, ImpersonatorPayload, OtherPayload,
]

PAYLOAD_TYPES = {
    cls.report_type: cls
    for cls in (CopyrightPayload, TrademarkPayload, CounterfeitPayload, ImpersonatorPayload, OtherPayload)
}


def payload_fields(report_type):
    """Field names stored for a report type."""
    return [field.name for field in fields(PAYLOAD_TYPES[report_type])]


def payload_from_dict(report_type, data):
    """Rebuild the typed payload from stored JSON, dropping unknown keys."""
    cls = PAYLOAD_TYPES[report_type]
    data = data or {}
    values = {}
    for field in fields(cls):
        if field.name not in data:
            continue
        value = data[field.name]
        if field.name in cls.link_fields:
            value = tuple(value or ())
        values[field.name] = value
    return cls(**values)
