"""
App settings, read from the LAYERED_NAVIGATION dict in Django settings.
"""

from django.conf import settings

DEFAULTS = {
    'SEARCH_BACKEND': 'apps.storefront.services.backend.DatabaseSearchBackend',
    'PAGE_VAR': 'page',
    'SEARCH_VAR': 'q',
    'CATEGORY_VAR': 'cat',
}


def get_setting(name):
    user_settings = getattr(settings, 'LAYERED_NAVIGATION', {})
    return user_settings.get(name, DEFAULTS[name])
