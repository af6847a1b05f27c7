"""Acceptance testing for the GitLab Terraform provider's group variables."""

__version__ = "0.1.0"
