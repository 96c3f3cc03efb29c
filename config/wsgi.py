"""
WSGI config for hrm project.

Serves the plain HTTP API (admin, REST endpoints, health) without sockets.
Realtime clients must connect through ``config.asgi``; under WSGI no server is
registered with ``hrm.realtime.handle``, so broadcasts are no-ops.

"""

import os

from django.core.wsgi import get_wsgi_application

# If DJANGO_SETTINGS_MODULE is unset, select a sensible default based on BUILD_ENV
if "DJANGO_SETTINGS_MODULE" not in os.environ:
    build_env = os.environ.get("BUILD_ENV", "production").lower()
    os.environ.setdefault(
        "DJANGO_SETTINGS_MODULE",
        "config.settings.local" if build_env == "local" else "config.settings.production",
    )

application = get_wsgi_application()
