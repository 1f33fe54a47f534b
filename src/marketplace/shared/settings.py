"""Accessors for the `[custom]` section of domain.toml."""

from protean.utils.globals import current_domain

_DEFAULTS = {
    "delivery_window_days": 5,
    "placeholder_image": "defaultImage.png",
    "image_store_dir": "uploads",
    "image_base_url": "/uploads",
}


def setting(name: str):
    custom = current_domain.config.get("custom") or {}
    value = custom.get(name)
    if value in (None, ""):
        return _DEFAULTS[name]
    return value


def delivery_window_days() -> int:
    return int(setting("delivery_window_days"))


def placeholder_image() -> str:
    return setting("placeholder_image")
