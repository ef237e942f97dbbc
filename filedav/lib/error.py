#!/usr/bin/env python
import logging
import os
from typing import Optional

from filedav import __version__

## Environmental variables prepended with "PYTHON_FILEDAV" are used for debug purposes,
## environmental variables prepended with "FILEDAV_" are for connection parameters
## one of DEBUG, DEVELOPMENT, PRODUCTION
debugmode = os.environ.get("PYTHON_FILEDAV_DEBUGMODE")
if not debugmode:
    if "dev" in __version__:
        debugmode = "DEVELOPMENT"
    else:
        debugmode = "PRODUCTION"

log = logging.getLogger("filedav")
if debugmode.startswith("DEBUG"):
    log.setLevel(logging.DEBUG)
else:
    log.setLevel(logging.WARNING)


def weirdness(*reasons) -> None:
    """
    Logs a deviation from the protocol that we are able to work
    around.  Servers in the wild do all kind of funny things, so this
    should never raise.
    """
    from filedav.lib.debug import xmlstring

    reason = " : ".join([xmlstring(x) for x in reasons])
    log.warning(f"Deviation from expectations found: {reason}")


class DAVError(Exception):
    url: Optional[str] = None
    reason: str = "no reason"

    def __init__(self, url: Optional[str] = None, reason: Optional[str] = None) -> None:
        if url:
            self.url = url
        if reason:
            self.reason = reason

    def __str__(self) -> str:
        return "%s at '%s', reason %s" % (
            self.__class__.__name__,
            self.url,
            self.reason,
        )


class AuthenticationRequired(DAVError):
    """
    The server answered 401, but no credentials have been given to
    the client.
    """

    pass


class AuthenticationFailed(DAVError):
    """
    The server rejected the credentials, also after the one retry
    following the authentication challenge.
    """

    pass


class AuthorizationError(DAVError):
    """
    The client encountered an HTTP 403 error and is passing it on
    to the user. The url property will contain the url in question,
    the reason property will contain the excuse the server sent.
    """

    pass


class PreconditionFailed(DAVError):
    """HTTP 412, typically an If-Match with an outdated etag"""

    pass


class NotFoundError(DAVError):
    pass


class MalformedResponse(DAVError):
    """The XML from the server could not be parsed or made no sense"""

    pass


class TransportError(DAVError):
    """
    Connection failure, timeout, TLS problems, etc.  The original
    exception from the requests library is available as __cause__
    """

    pass


class ResponseError(DAVError):
    status: Optional[int] = None

    def __init__(
        self,
        url: Optional[str] = None,
        reason: Optional[str] = None,
        status: Optional[int] = None,
    ) -> None:
        super().__init__(url, reason)
        if status is not None:
            self.status = status


class ServerError(ResponseError):
    """Any 5xx status"""

    pass


class PropertyUpdateFailed(ResponseError):
    """A PROPPATCH was rejected for one or more properties"""

    pass


def raise_for_status(status: int, url: Optional[str] = None, reason: str = "") -> None:
    """
    Maps a HTTP status code to the exception hierarchy above.  2xx
    statuses pass silently.  401 is not handled here, it's up to the
    authentication logic in the client to decide if it's
    AuthenticationRequired or AuthenticationFailed.
    """
    if 200 <= status < 300:
        return
    reason = "%s %s" % (status, reason) if reason else str(status)
    if status == 403:
        raise AuthorizationError(url=url, reason=reason)
    if status == 404:
        raise NotFoundError(url=url, reason=reason)
    if status == 412:
        raise PreconditionFailed(url=url, reason=reason)
    if status >= 500:
        raise ServerError(url=url, reason=reason, status=status)
    raise ResponseError(url=url, reason=reason, status=status)
