"""Business services: admin auth, eligibility, intake, notifications and chat."""

import importlib as _importlib
from typing import Any

# Explicit lazy-loading map: name -> (module_path, attribute_name)
_LAZY_MODULE_MAP = {
    "AdminAuthService": ("leadflow.services.admin_auth", "AdminAuthService"),
    "AuthState": ("leadflow.services.admin_auth", "AuthState"),
    "ChatResponder": ("leadflow.services.chatbot", "ChatResponder"),
    "EligibilityResult": ("leadflow.services.eligibility", "EligibilityResult"),
    "evaluate_comprehensive": ("leadflow.services.eligibility", "evaluate_comprehensive"),
    "evaluate_simple": ("leadflow.services.eligibility", "evaluate_simple"),
    "LeadIntakeService": ("leadflow.services.intake", "LeadIntakeService"),
    "NotificationService": ("leadflow.services.notification.service", "NotificationService"),
    "generate_otp": ("leadflow.services.otp_generator", "generate_otp"),
}

__all__ = list(_LAZY_MODULE_MAP.keys())


def __getattr__(name: str) -> Any:
    """Lazy import with explicit mapping - importlib based."""
    if name in _LAZY_MODULE_MAP:
        module_path, attr_name = _LAZY_MODULE_MAP[name]
        module = _importlib.import_module(module_path)
        attr = getattr(module, attr_name)
        globals()[name] = attr
        return attr
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
