"""Language template download and expansion."""

from faasctl.templates.fetch import TemplateError, fetch_templates, pull_templates

__all__ = ["TemplateError", "fetch_templates", "pull_templates"]
