"""Domain layer for ridelog application.

Services are imported lazily so that the storage layer can import domain
entities without pulling the services (and therefore itself) back in.
"""

_SERVICES = {
    "TripService": "ridelog.domain.trip",
    "SettingsService": "ridelog.domain.settings",
    "ReportService": "ridelog.domain.report",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        import importlib

        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
