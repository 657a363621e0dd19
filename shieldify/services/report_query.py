"""
Report list queries shared by the admin list, the customer dashboard and the
CSV export.

Filters arrive as query-string values; anything unrecognised is ignored
rather than rejected. Every query joins the owner's profile for email and
display name, and a non-admin caller is always restricted to their own rows.
"""
import logging
import math
from dataclasses import dataclass, field
from datetime import datetime, time, timezone
from typing import List, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import contains_eager

from shieldify.constants import VALID_PLATFORMS, VALID_REPORT_TYPES, VALID_STATUSES
from shieldify.errors import AuthorizationError, PersistenceError
from shieldify.models import Report, UserProfile

logger = logging.getLogger(__name__)

SORT_COLUMNS = {
    'created_at': Report.created_at,
    'status': Report.status,
}
DEFAULT_SORT_FIELD = 'created_at'
MAX_PAGE = 10 ** 6


def parse_sort(value):
    """``field[:dir]`` -> (field, descending). Unknown fields fall back to newest first."""
    sort_field, _, direction = (value or '').strip().partition(':')
    if sort_field not in SORT_COLUMNS:
        return DEFAULT_SORT_FIELD, True
    return sort_field, direction == 'desc'


def parse_date(value, end_of_day=False):
    """ISO date or datetime -> naive UTC datetime; None when blank or unparsable."""
    value = (value or '').strip()
    if not value:
        return None
    if value.endswith(('Z', 'z')):
        value = value[:-1] + '+00:00'
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        logger.debug(f'Ignoring unparsable date filter: {value!r}')
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    elif end_of_day and 'T' not in value and ' ' not in value:
        # date-only upper bound covers the whole day
        parsed = datetime.combine(parsed.date(), time.max)
    return parsed


def parse_page(value):
    try:
        page = int(value)
    except (TypeError, ValueError):
        return 1
    return min(max(1, page), MAX_PAGE)


def _choice(value, allowed):
    value = (value or '').strip()
    return value if value in allowed else None


def _like(term):
    escaped = term.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')
    return f'%{escaped}%'


@dataclass
class ReportFilters:
    q: Optional[str] = None
    email: Optional[str] = None
    status: Optional[str] = None
    platform: Optional[str] = None
    report_type: Optional[str] = None
    created_from: Optional[datetime] = None
    created_to: Optional[datetime] = None
    sort_field: str = DEFAULT_SORT_FIELD
    sort_desc: bool = True
    page: int = 1

    @classmethod
    def from_args(cls, args):
        sort_field, sort_desc = parse_sort(args.get('sort'))
        return cls(
            q=(args.get('q') or '').strip() or None,
            email=(args.get('email') or '').strip() or None,
            status=_choice(args.get('status'), VALID_STATUSES),
            platform=_choice(args.get('platform'), VALID_PLATFORMS),
            report_type=_choice(args.get('report_type'), VALID_REPORT_TYPES),
            created_from=parse_date(args.get('created_from')),
            created_to=parse_date(args.get('created_to'), end_of_day=True),
            sort_field=sort_field,
            sort_desc=sort_desc,
            page=parse_page(args.get('page')),
        )

    @property
    def sort(self):
        return f'{self.sort_field}:{"desc" if self.sort_desc else "asc"}'


@dataclass
class ReportPage:
    items: List[Report] = field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 20

    @property
    def offset(self):
        return (self.page - 1) * self.page_size

    @property
    def total_pages(self):
        return max(1, math.ceil(self.total / self.page_size))

    @property
    def has_prev(self):
        return self.page > 1

    @property
    def has_next(self):
        return self.page < self.total_pages

    @property
    def first_index(self):
        return self.offset + 1 if self.items else 0

    @property
    def last_index(self):
        return self.offset + len(self.items)


def report_criteria(context, filters):
    """WHERE clauses for a caller and a set of filters."""
    if not context.is_authenticated:
        raise AuthorizationError('Sign in to list reports')

    criteria = []
    if not context.is_admin:
        criteria.append(Report.customer_id == context.user_id)

    if filters.status:
        criteria.append(Report.status == filters.status)
    if filters.platform:
        criteria.append(Report.platform == filters.platform)
    if filters.report_type:
        criteria.append(Report.report_type == filters.report_type)
    if filters.email:
        criteria.append(UserProfile.email.ilike(_like(filters.email), escape='\\'))
    if filters.created_from:
        criteria.append(Report.created_at >= filters.created_from)
    if filters.created_to:
        criteria.append(Report.created_at <= filters.created_to)
    if filters.q:
        pattern = _like(filters.q)
        criteria.append(or_(
            Report.report_number.ilike(pattern, escape='\\'),
            Report.account_page_name.ilike(pattern, escape='\\'),
            UserProfile.email.ilike(pattern, escape='\\'),
            UserProfile.full_name.ilike(pattern, escape='\\'),
        ))
    return criteria


def build_report_query(context, filters):
    """Ordered SELECT of reports with their customer profile eagerly joined."""
    stmt = select(Report).join(Report.customer).options(contains_eager(Report.customer))
    for criterion in report_criteria(context, filters):
        stmt = stmt.where(criterion)

    column = SORT_COLUMNS[filters.sort_field]
    return stmt.order_by(column.desc() if filters.sort_desc else column.asc(), Report.id.asc())


def count_reports(session, context, filters):
    stmt = select(func.count(Report.id)).join(Report.customer)
    for criterion in report_criteria(context, filters):
        stmt = stmt.where(criterion)
    return session.execute(stmt).scalar_one()


def list_reports(session, context, filters, page_size=20):
    """One page of matching reports. Store failures raise PersistenceError."""
    stmt = build_report_query(context, filters)
    offset = (filters.page - 1) * page_size
    try:
        total = count_reports(session, context, filters)
        items = session.execute(stmt.limit(page_size).offset(offset)).scalars().unique().all()
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error(f'Report list query failed: {exc}')
        raise PersistenceError(str(exc)) from exc

    return ReportPage(items=list(items), total=total, page=filters.page, page_size=page_size)


def export_reports(session, context, filters, limit=2000):
    """All matching reports up to ``limit``, ignoring the page number."""
    stmt = build_report_query(context, filters)
    try:
        return list(session.execute(stmt.limit(limit)).scalars().unique().all())
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error(f'Report export query failed: {exc}')
        raise PersistenceError(str(exc)) from exc
