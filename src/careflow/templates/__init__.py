"""Default jinja2 templates for notifications and plan reports."""

from careflow.templates.messages import MESSAGE_TEMPLATES
from careflow.templates.plan_report import PLAN_REPORT_TEMPLATE

__all__ = ["MESSAGE_TEMPLATES", "PLAN_REPORT_TEMPLATE"]
