"""
Adapters package - External service connections.
Recipe search provider, SMTP email and image hosting.
"""

from adapters import email_templates, email_adapter, image_host, recipe_provider

__all__ = [
    "recipe_provider",
    "email_adapter",
    "email_templates",
    "image_host",
]
