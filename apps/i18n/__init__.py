__all__ = ["BilingualValue", "resolve", "normalize_language", "direction", "namespaced_key"]


def __getattr__(name):
    if name in {"BilingualValue", "resolve"}:
        from . import values

        return getattr(values, name)
    if name in {"normalize_language", "direction", "namespaced_key"}:
        from . import utils

        return getattr(utils, name)
    raise AttributeError(f"module 'apps.i18n' has no attribute '{name}'")
