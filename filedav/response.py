"""
Wrappers around the responses from the requests library.

``DAVResponse`` holds a fully read response, used for everything
except GET.  ``ResponseStream`` is what the user gets from
``DAVClient.get``, it reads the body lazily and hands the connection
back to the pool once it's exhausted or closed.
"""

import logging
from typing import Iterator
from typing import Optional

import requests
from requests.models import Response
from requests.structures import CaseInsensitiveDict

from filedav.lib import error

log = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024


class DAVResponse:
    """
    This class is a response from a DAV request.  It is instantiated from
    the DAVClient class.  End users of the library should not need to
    know anything about this class.
    """

    reason: str = ""
    headers: CaseInsensitiveDict = None
    status: int = 0
    content: bytes = b""
    url: Optional[str] = None

    def __init__(self, response: Response) -> None:
        self.headers = response.headers
        self.status = response.status_code
        self.url = response.url
        log.debug("response headers: " + str(self.headers))
        log.debug("response status: " + str(self.status))
        self.content = response.content or b""
        ## some servers send responses without a reason phrase
        try:
            self.reason = response.reason or ""
        except AttributeError:
            self.reason = ""
        content_type = self.headers.get("Content-Type", "")
        if self.status == 207 and content_type and "xml" not in content_type:
            error.weirdness(f"Unexpected content type for multistatus: {content_type}")
        if log.isEnabledFor(logging.DEBUG) and "xml" in content_type:
            log.debug(self.content)


class ResponseStream:
    """
    A lazily read response body.

    The stream is a context manager and an iterator over byte chunks,
    and it has a ``read`` method like a binary file.  The underlying
    connection is released when the body is exhausted, or when
    ``close`` is called, whatever comes first.  Calling ``close`` more
    than once is harmless.

    Example:
        with client.get("big.iso") as stream:
            for chunk in stream:
                f.write(chunk)
    """

    def __init__(
        self, response: Response, chunk_size: int = DEFAULT_CHUNK_SIZE
    ) -> None:
        self._response = response
        self.chunk_size = chunk_size
        self.status = response.status_code
        self.headers = response.headers
        self.url = response.url
        self._chunks: Optional[Iterator[bytes]] = None
        self._buffer = b""
        self.closed = False

    @property
    def content_type(self) -> Optional[str]:
        return self.headers.get("Content-Type")

    @property
    def content_length(self) -> Optional[int]:
        try:
            return int(self.headers["Content-Length"])
        except (KeyError, ValueError, TypeError):
            return None

    @property
    def etag(self) -> Optional[str]:
        return self.headers.get("ETag")

    def _next_chunk(self) -> bytes:
        """Returns the next chunk, or b"" when the body is exhausted"""
        if self.closed:
            return b""
        if self._chunks is None:
            self._chunks = self._response.iter_content(chunk_size=self.chunk_size)
        try:
            for chunk in self._chunks:
                if chunk:
                    return chunk
        except requests.RequestException as e:
            self.close()
            raise error.TransportError(
                url=self.url, reason="error while reading body: %s" % e
            ) from e
        self.close()
        return b""

    def read(self, size: int = -1) -> bytes:
        """
        Read up to size bytes, or everything that's left if size is
        negative.  Returns b"" at the end of the body.
        """
        if size is None or size < 0:
            parts = [self._buffer]
            self._buffer = b""
            while True:
                chunk = self._next_chunk()
                if not chunk:
                    break
                parts.append(chunk)
            return b"".join(parts)
        while len(self._buffer) < size:
            chunk = self._next_chunk()
            if not chunk:
                break
            self._buffer += chunk
        ret, self._buffer = self._buffer[:size], self._buffer[size:]
        return ret

    def __iter__(self) -> Iterator[bytes]:
        if self._buffer:
            buffered, self._buffer = self._buffer, b""
            yield buffered
        while True:
            chunk = self._next_chunk()
            if not chunk:
                return
            yield chunk

    def readable(self) -> bool:
        return True

    def close(self) -> None:
        """Releases the connection.  May be called several times."""
        if self.closed:
            return
        self.closed = True
        self._response.close()

    def __enter__(self) -> "ResponseStream":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def __del__(self) -> None:
        ## the user is supposed to close the stream, this is just
        ## to avoid leaking connections if it's forgotten
        if not getattr(self, "closed", True):
            log.warning("ResponseStream for %s was never closed", self.url)
            self.close()
