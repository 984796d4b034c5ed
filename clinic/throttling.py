from rest_framework.throttling import AnonRateThrottle, UserRateThrottle


class LoginRateThrottle(AnonRateThrottle):
    """Per-IP limit on credential checks (``login`` rate in settings)."""
    scope = 'login'


class AIAnalysisRateThrottle(UserRateThrottle):
    scope = 'ai'
