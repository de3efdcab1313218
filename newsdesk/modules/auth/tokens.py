"""
Admin credentials and bearer tokens.

Tokens are HS256 JWTs carrying ``sub``, ``role``, ``iat`` and ``exp``.
There is no revocation list; expiry is the only way a token dies.
"""

import hmac
import re
import time
from datetime import timedelta

from joserfc import jwt
from joserfc.errors import JoseError, ExpiredTokenError
from joserfc.jwk import OctKey

from ...core.errors import Unauthenticated, InvalidCredentials
from ...core.logging_service import LoggingService

TOKEN_TTL = timedelta(days=7)
ADMIN_ROLE = 'admin'
ALGORITHM = 'HS256'

_BEARER_RE = re.compile(r'^Bearer\s+(.+)$', re.IGNORECASE)

CLAIMS_OPTIONS = {
    'sub': {'essential': True},
    'exp': {'essential': True},
}


def _signing_key(secret):
    return OctKey.import_key(secret)


def _matches(supplied, expected):
    if not isinstance(supplied, str) or not isinstance(expected, str):
        return False
    return hmac.compare_digest(supplied.encode('utf-8'), expected.encode('utf-8'))


def issue_token(subject, secret, role=ADMIN_ROLE, issued_at=None):
    """Sign a token for ``subject`` that expires TOKEN_TTL after issued_at."""
    iat = int(issued_at if issued_at is not None else time.time())
    payload = {
        'sub': subject,
        'role': role,
        'iat': iat,
        'exp': iat + int(TOKEN_TTL.total_seconds()),
    }
    return jwt.encode({'alg': ALGORITHM, 'typ': 'JWT'}, payload, _signing_key(secret))


def verify_credentials(username, password, admin_user, admin_password, secret):
    """Exact match against the configured admin; returns a fresh token.

    Raises:
        InvalidCredentials: username or password does not match.
    """
    # Both comparisons always run
    user_ok = _matches(username, admin_user)
    password_ok = _matches(password, admin_password)
    if not (user_ok and password_ok):
        raise InvalidCredentials()
    return issue_token(username, secret)


def authenticate(authorization, secret, now=None):
    """Validate an ``Authorization`` header value and return its claims.

    Every failure raises the same Unauthenticated; the reason only goes to
    the security log.
    """
    match = _BEARER_RE.match(authorization or '')
    if not match:
        raise Unauthenticated()

    token = match.group(1).strip()
    if not token:
        raise Unauthenticated()

    try:
        decoded = jwt.decode(token, _signing_key(secret), algorithms=[ALGORITHM])
        registry = jwt.JWTClaimsRegistry(
            now=int(now) if now is not None else None,
            **CLAIMS_OPTIONS,
        )
        registry.validate(decoded.claims)
    except ExpiredTokenError:
        LoggingService.log_security_event('Rejected expired token')
        raise Unauthenticated()
    except (JoseError, ValueError, TypeError) as e:
        LoggingService.log_security_event('Rejected invalid token', {'reason': type(e).__name__})
        raise Unauthenticated()

    return dict(decoded.claims)
