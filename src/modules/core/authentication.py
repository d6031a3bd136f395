"""JWT authentication for browser ``EventSource`` connections.

``EventSource`` cannot set an ``Authorization`` header, so the live-update
stream also accepts the SimpleJWT access token as ``?token=``.  Any
decode / validation error returns 401 (Fail Closed).
"""

import structlog
from rest_framework_simplejwt.authentication import JWTAuthentication

logger = structlog.get_logger(__name__)

TOKEN_QUERY_PARAM = "token"


class QueryParamJWTAuthentication(JWTAuthentication):
    """Header first, then the ``token`` query parameter."""

    def authenticate(self, request):
        result = super().authenticate(request)
        if result is not None:
            return result

        raw_token = request.query_params.get(TOKEN_QUERY_PARAM)
        if not raw_token:
            return None

        validated_token = self.get_validated_token(raw_token.encode())
        user = self.get_user(validated_token)
        logger.debug("auth.query_token_accepted", user_id=str(user.pk))
        return user, validated_token
