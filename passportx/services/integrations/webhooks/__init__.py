"""Webhook integrations."""
