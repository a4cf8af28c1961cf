from django import template

register = template.Library()

_VARIANT_CLASSES = {
    "success": "success",
    "warning": "warning",
    "destructive": "danger",
}


@register.filter
def variant_class(variant: str) -> str:
    """Map a success/warning/destructive variant onto a Bootstrap colour."""
    return _VARIANT_CLASSES.get(variant, "secondary")


@register.filter
def trend_icon(trend: str | None) -> str:
    return {"up": "↑", "down": "↓", "stable": "→"}.get(trend or "", "")
