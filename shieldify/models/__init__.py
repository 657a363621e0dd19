# Import all models
from .account import Account
from .user_profile import UserProfile
from .report import Report
from .report_audit_log import ReportAuditLog

__all__ = ['Account', 'UserProfile', 'Report', 'ReportAuditLog']
