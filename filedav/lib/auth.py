"""
Authentication negotiation for the WebDAV client.

Only HTTP Basic authentication is negotiated.  Credentials may be sent
preemptively with every request, or only after the server has
challenged the client with a 401 and a ``WWW-Authenticate: Basic``
header.  In the latter case the request is retried exactly once.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from dataclasses import field

from requests.auth import AuthBase
from requests.auth import HTTPBasicAuth

log = logging.getLogger(__name__)


def extract_auth_types(header: str) -> set[str]:
    """
    Extract authentication types from WWW-Authenticate header.

    Parses the WWW-Authenticate header value and extracts the
    authentication scheme names (e.g., "basic", "digest", "bearer").

    Args:
        header: WWW-Authenticate header value from server response.

    Returns:
        Set of lowercase auth type strings.

    Example:
        >>> extract_auth_types('Basic realm="test", Digest realm="test"')
        {'basic', 'digest'}

    Reference:
        https://developer.mozilla.org/en-US/docs/Web/HTTP/Headers/WWW-Authenticate#syntax
    """
    ## Parameters like realm="x" also contain no spaces, so we only pick
    ## the tokens that do not look like auth-params.
    types = set()
    for challenge in header.lower().split(","):
        words = challenge.split()
        if words and "=" not in words[0]:
            types.add(words[0])
    return types


@dataclass(frozen=True)
class Credentials:
    """
    Username and password for one client.  The password is kept out
    of the repr, so credentials do not leak into logs or tracebacks.
    """

    username: str
    password: str = field(repr=False)
    preemptive: bool = False

    def auth_object(self) -> AuthBase:
        return HTTPBasicAuth(self.username, self.password)


class AuthNegotiator:
    """
    Decides whether a request should carry credentials.

    The negotiator is owned by exactly one DAVClient.  It is not
    thread safe to change the credentials while requests are in
    flight.
    """

    def __init__(self, credentials: Credentials | None = None) -> None:
        self.credentials = credentials
        ## hosts that have challenged us with basic auth
        self._challenged_hosts: set[str] = set()

    def set_credentials(self, credentials: Credentials | None) -> None:
        self.credentials = credentials
        self._challenged_hosts = set()

    @property
    def has_credentials(self) -> bool:
        return self.credentials is not None

    def auth_for(self, host: str) -> AuthBase | None:
        """
        Returns the auth object to attach to the first attempt of a
        request towards ``host``, or None if the request should go out
        without credentials.
        """
        if not self.credentials:
            return None
        if self.credentials.preemptive or host in self._challenged_hosts:
            return self.credentials.auth_object()
        return None

    def challenge_auth(self, host: str, www_authenticate: str) -> AuthBase | None:
        """
        Called on a 401 for a request that was sent without
        credentials.  Returns the auth object for the single retry, or
        None if the challenge can't be answered.  The host is
        remembered, later requests to it will carry the credentials
        from the start.
        """
        if not self.credentials:
            return None
        auth_types = extract_auth_types(www_authenticate or "")
        if "basic" not in auth_types:
            log.debug("server offers no basic auth, only %s", auth_types)
            return None
        self._challenged_hosts.add(host)
        return self.credentials.auth_object()
