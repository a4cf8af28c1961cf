from neuralcare.users.session import resolve_session_context


class SessionContextMiddleware:
    """Resolve the visitor's identity and role once and attach them to the request."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request.session_context = resolve_session_context(getattr(request, "user", None))
        return self.get_response(request)
