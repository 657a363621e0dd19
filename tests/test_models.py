# tests/test_models.py
"""
Tests for the data models
"""
import pytest

from shieldify.models import Account, Report
from shieldify.validation import CopyrightPayload, OtherPayload


class TestAccountModel:

    def test_password_hashing(self, app_context, db):
        account = Account(email='a@test.com')
        account.set_password('Secret123')
        assert account.password_hash != 'Secret123'
        assert account.check_password('Secret123')
        assert not account.check_password('wrong')

    def test_no_password(self, app_context, db):
        assert not Account(email='b@test.com').check_password('anything')

    def test_profile_relationship(self, app_context, customer):
        account = customer.account
        assert account.profile.id == customer.id
        assert account.profile.role == 'customer'


class TestUserProfileModel:

    def test_roles(self, app_context, customer, admin_user):
        assert not customer.is_admin
        assert admin_user.is_admin

    def test_display_name(self, app_context, db, customer):
        assert customer.display_name == 'Test Customer'
        customer.full_name = None
        assert customer.display_name == 'customer@test.com'


class TestReportModel:

    def test_defaults(self, app_context, db, customer):
        report = Report(
            customer_id=customer.id, platform='tiktok', report_type='other',
            account_page_name='@x', infringing_urls=['https://x.com'],
            form_payload={'other_details': 'Spam'},
        )
        db.session.add(report)
        db.session.commit()

        assert len(report.id) == 36
        assert report.status == 'pending'
        assert report.report_number is None
        assert report.created_at is not None
        assert report.customer.email == 'customer@test.com'

    def test_typed_payload(self, app_context, report):
        assert report.payload == CopyrightPayload(work_description='My photo')

    def test_payload_follows_report_type(self, app_context, other_report):
        assert isinstance(other_report.payload, OtherPayload)

    def test_report_type_is_immutable(self, app_context, report):
        with pytest.raises(ValueError):
            report.report_type = 'trademark'

    def test_owner_is_immutable(self, app_context, report, second_customer):
        with pytest.raises(ValueError):
            report.customer_id = second_customer.id

    def test_same_value_is_allowed(self, app_context, db, report):
        report.report_type = 'copyright'
        db.session.commit()
        assert report.report_type == 'copyright'

    def test_customer_reports_relationship(self, app_context, customer, report, other_report):
        assert customer.reports.count() == 1
        assert customer.reports.first().id == report.id
