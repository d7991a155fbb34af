"""JWT implementation of the TokenVerifier interface."""

from jose import JWTError, jwt

from playscribe.common import AuthenticationError

from .interfaces import TokenVerifier


class JWTTokenVerifier(TokenVerifier):
    """Validates signature and expiry of access tokens issued by the auth service."""

    def __init__(self, secret_key: str, algorithm: str = "HS256"):
        self._secret_key = secret_key
        self._algorithm = algorithm

    def verify(self, token: str) -> str:
        if not token:
            raise AuthenticationError("No token provided")
        if not self._secret_key:
            raise AuthenticationError("Token verification is not configured")

        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except JWTError as e:
            raise AuthenticationError("Invalid or expired token") from e

        user_id = payload.get("userId") or payload.get("sub")
        if not user_id:
            raise AuthenticationError("Token carries no user id")
        return str(user_id)
