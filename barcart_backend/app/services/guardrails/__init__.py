from .smoke_rules import (
    allowed_methods,
    get_safe_smoke_time,
    get_safe_smoke_time_for_wood,
    resolve_cap,
    smoke_method_guidance,
    troubleshoot,
    validate_recipe,
)

__all__ = [
    "allowed_methods",
    "get_safe_smoke_time",
    "get_safe_smoke_time_for_wood",
    "resolve_cap",
    "smoke_method_guidance",
    "troubleshoot",
    "validate_recipe",
]
