from django.conf import settings

from neuralcare.users.navigation import menu_for_role


def allauth_settings(request):
    """Expose some settings from django-allauth in templates."""
    return {
        "ACCOUNT_ALLOW_REGISTRATION": settings.ACCOUNT_ALLOW_REGISTRATION,
    }


def navigation(request):
    """Expose the resolved session context and the matching sidebar menu."""
    context = getattr(request, "session_context", None)
    role = context.role if context is not None else None
    return {
        "session_context": context,
        "nav_menu": menu_for_role(role),
    }
