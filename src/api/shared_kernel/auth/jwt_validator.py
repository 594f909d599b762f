"""Signed bearer tokens.

Access tokens are HMAC-signed JWTs carrying the user id in ``sub``. The
same secret signs and verifies, so issuing and validation live together.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

from jose import JWTError, jwt
from jose.exceptions import ExpiredSignatureError, JWTClaimsError

from shared_kernel.exceptions import UnauthenticatedError

if TYPE_CHECKING:
    from shared_kernel.auth.observability import JWTValidatorProbe


@dataclass(frozen=True)
class TokenClaims:
    """Validated JWT claims."""

    user_id: int
    username: str | None


class InvalidTokenError(UnauthenticatedError):
    """Raised when JWT validation fails."""

    pass


class JWTValidator:
    """Issues and validates HMAC-signed access tokens.

    Validates signature, expiry and issuer. Tokens carry no tenant; the
    tenant is always read from the user's stored record.
    """

    def __init__(
        self,
        secret: str,
        probe: JWTValidatorProbe,
        algorithm: str = "HS256",
        issuer: str = "tenantgate",
        ttl: timedelta = timedelta(hours=1),
    ):
        """Initialize the JWT validator.

        Args:
            secret: Shared HMAC secret.
            probe: Observability probe for logging events.
            algorithm: HMAC algorithm (HS256, HS384 or HS512).
            issuer: Value written to and required in the ``iss`` claim.
            ttl: Lifetime of issued tokens.
        """
        self._secret = secret
        self._probe = probe
        self._algorithm = algorithm
        self._issuer = issuer
        self._ttl = ttl

    def issue_token(self, user_id: int, username: str) -> str:
        """Sign an access token for ``user_id``.

        Args:
            user_id: The authenticated user's id.
            username: Carried for display only; never trusted on the way in.

        Returns:
            The encoded JWT.
        """
        now = datetime.now(tz=timezone.utc)
        claims = {
            "sub": str(user_id),
            "username": username,
            "iss": self._issuer,
            "iat": now,
            "exp": now + self._ttl,
        }
        token = jwt.encode(claims, self._secret, algorithm=self._algorithm)
        self._probe.token_issued(user_id=str(user_id))
        return token

    def validate_token(self, token: str) -> TokenClaims:
        """Validate JWT and return claims.

        Args:
            token: The JWT token string.

        Returns:
            TokenClaims containing the validated claims.

        Raises:
            InvalidTokenError: If token is invalid, expired, or verification fails.
        """
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                issuer=self._issuer,
                options={
                    "verify_signature": True,
                    "verify_aud": False,
                    "verify_iss": True,
                    "verify_exp": True,
                    "verify_iat": True,
                },
            )
        except ExpiredSignatureError as e:
            self._probe.token_validation_failed(reason="Token expired")
            raise InvalidTokenError("Token has expired") from e
        except JWTClaimsError as e:
            if "issuer" in str(e).lower():
                self._probe.token_validation_failed(reason="Invalid issuer")
                raise InvalidTokenError("Invalid issuer claim") from e
            self._probe.token_validation_failed(reason=f"Claims error: {e}")
            raise InvalidTokenError(f"Invalid token claims: {e}") from e
        except JWTError as e:
            if "signature" in str(e).lower():
                self._probe.token_validation_failed(reason="Invalid signature")
                raise InvalidTokenError("Invalid token signature") from e
            self._probe.token_validation_failed(reason=f"JWT error: {e}")
            raise InvalidTokenError(f"Invalid token: {e}") from e

        subject = claims.get("sub")
        if subject is None:
            self._probe.token_validation_failed(reason="Missing sub claim")
            raise InvalidTokenError("Missing required claim: sub")

        try:
            user_id = int(subject)
        except (TypeError, ValueError) as e:
            self._probe.token_validation_failed(reason="Non-numeric sub claim")
            raise InvalidTokenError("Invalid sub claim") from e

        username = claims.get("username")
        self._probe.token_validated(user_id=str(user_id))

        return TokenClaims(
            user_id=user_id,
            username=str(username) if username is not None else None,
        )
