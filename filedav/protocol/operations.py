"""
WebDAV protocol operations combining request building and response parsing.

This class provides a high-level interface to WebDAV operations while
remaining completely I/O-free.
"""

from typing import Any
from typing import Dict
from typing import Iterable
from typing import List
from typing import Mapping
from typing import Optional
from typing import Union

from requests.structures import CaseInsensitiveDict

from filedav.lib.url import quote_path
from filedav.lib.url import URL
from filedav.resource import DavResource
from filedav.resource import normalize_path

from .types import DAVMethod, DAVRequest, MultistatusResponse
from .xml_builders import PropName, build_propfind_body, build_proppatch_body
from .xml_parsers import (
    parse_multistatus,
    parse_proppatch_failures,
    parse_propfind_response,
)

DEPTHS = ("0", "1", "infinity")

XML_CONTENT_TYPE = 'application/xml; charset="utf-8"'


class WebDAVProtocol:
    """
    Sans-I/O WebDAV protocol handler.

    Builds requests and parses responses without doing any I/O.
    All HTTP communication is delegated to an external I/O implementation.

    Example:
        protocol = WebDAVProtocol(base_url="https://cloud.example.com/dav/")

        # Build request
        request = protocol.propfind_request("documents/", depth=1)

        # Execute with your I/O (not shown)
        response = io.execute(request)

        # Parse response
        resources = protocol.parse_propfind(response.content)
    """

    def __init__(
        self,
        base_url: Union[str, URL],
        headers: Optional[Mapping[str, str]] = None,
        huge_tree: bool = False,
    ) -> None:
        """
        Args:
            base_url: Base URL of the WebDAV server, without credentials
            headers: Headers to send with every request
            huge_tree: Allow parsing very large XML documents
        """
        self.url = URL.objectify(base_url)
        self.headers = CaseInsensitiveDict(headers or {})
        self.huge_tree = huge_tree

    def url_for(self, path: Union[str, URL, None]) -> URL:
        """
        Resolve a path to a full URL.

        Relative paths are appended to the base URL, absolute paths
        replace the path of the base URL.  Full URLs are accepted as
        long as they point to the same server.  The path is
        percent-encoded, the query of the base URL is preserved.
        """
        if path is None or str(path) == "":
            return self.url
        path = str(path)
        if "://" in path:
            target = URL(path)
            if target.hostname != self.url.hostname:
                raise ValueError("%s can't be joined with %s" % (self.url, target))
            path = quote_path(target.path)
            if target.query:
                path += "?" + target.query
        else:
            path = quote_path(path)
        return self.url.join(path)

    def _headers(self, extra: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
        headers = self.headers.copy()
        headers.update(extra or {})
        return dict(headers)

    # =========================================================================
    # Request builders
    # =========================================================================

    def propfind_request(
        self,
        path: Union[str, URL, None],
        depth: Union[int, str] = 1,
        props: Optional[Iterable[PropName]] = None,
    ) -> DAVRequest:
        """
        Build a PROPFIND request.

        Args:
            path: Resource path or URL
            depth: Depth header value (0, 1, or "infinity")
            props: Property names to retrieve (None for allprop)

        Returns:
            DAVRequest ready for execution
        """
        depth = str(depth).lower()
        if depth not in DEPTHS:
            raise ValueError("depth must be one of %s, not %r" % (DEPTHS, depth))
        return DAVRequest(
            method=DAVMethod.PROPFIND,
            url=str(self.url_for(path)),
            headers=self._headers({"Depth": depth, "Content-Type": XML_CONTENT_TYPE}),
            body=build_propfind_body(props),
        )

    def get_request(
        self,
        path: Union[str, URL, None],
        headers: Optional[Mapping[str, str]] = None,
    ) -> DAVRequest:
        """
        Build a GET request.  The response body is to be streamed.
        """
        return DAVRequest(
            method=DAVMethod.GET,
            url=str(self.url_for(path)),
            headers=self._headers(headers),
            stream=True,
        )

    def put_request(
        self,
        path: Union[str, URL],
        body: Any,
        content_type: Optional[str] = None,
        etag: Optional[str] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> DAVRequest:
        """
        Build a PUT request.

        Args:
            path: Resource path or URL
            body: bytes, str (sent as utf-8), a file-like object or an
                iterator yielding bytes.  The two latter are streamed by
                the transport, using chunked transfer encoding when the
                length is not known.
            content_type: Content-Type header
            etag: If given, the resource is only overwritten if the
                etag on the server matches (If-Match)
            headers: Additional headers
        """
        if isinstance(body, str):
            body = body.encode("utf-8")
        if body is None:
            body = b""
        extra: Dict[str, str] = {}
        if content_type:
            extra["Content-Type"] = content_type
        if etag:
            extra["If-Match"] = etag
        extra.update(headers or {})
        return DAVRequest(
            method=DAVMethod.PUT,
            url=str(self.url_for(path)),
            headers=self._headers(extra),
            body=body,
        )

    def delete_request(self, path: Union[str, URL]) -> DAVRequest:
        return DAVRequest(
            method=DAVMethod.DELETE,
            url=str(self.url_for(path)),
            headers=self._headers(),
        )

    def mkcol_request(self, path: Union[str, URL]) -> DAVRequest:
        """
        Build a MKCOL request.  A collection URL ends with a slash, it
        is appended if missing.
        """
        url = self.url_for(path)
        if not url.path.endswith("/"):
            url = url.with_path(url.path + "/")
        return DAVRequest(
            method=DAVMethod.MKCOL,
            url=str(url),
            headers=self._headers(),
        )

    def move_request(
        self,
        source: Union[str, URL],
        destination: Union[str, URL],
        overwrite: bool = True,
    ) -> DAVRequest:
        return self._transfer_request(DAVMethod.MOVE, source, destination, overwrite)

    def copy_request(
        self,
        source: Union[str, URL],
        destination: Union[str, URL],
        overwrite: bool = True,
    ) -> DAVRequest:
        return self._transfer_request(DAVMethod.COPY, source, destination, overwrite)

    def _transfer_request(
        self,
        method: DAVMethod,
        source: Union[str, URL],
        destination: Union[str, URL],
        overwrite: bool,
    ) -> DAVRequest:
        ## The Destination header must be an absolute URL
        headers = self._headers(
            {
                "Destination": str(self.url_for(destination)),
                "Overwrite": "T" if overwrite else "F",
            }
        )
        return DAVRequest(
            method=method,
            url=str(self.url_for(source)),
            headers=headers,
        )

    def proppatch_request(
        self,
        path: Union[str, URL],
        set_props: Optional[Mapping[PropName, str]] = None,
        remove_props: Optional[Iterable[PropName]] = None,
    ) -> DAVRequest:
        """
        Build a PROPPATCH request to set and remove properties.

        Args:
            path: Resource path or URL
            set_props: Properties to set (name -> value)
            remove_props: Property names to remove

        Returns:
            DAVRequest ready for execution
        """
        return DAVRequest(
            method=DAVMethod.PROPPATCH,
            url=str(self.url_for(path)),
            headers=self._headers({"Content-Type": XML_CONTENT_TYPE}),
            body=build_proppatch_body(set_props, remove_props),
        )

    def options_request(self, path: Union[str, URL, None] = None) -> DAVRequest:
        return DAVRequest(
            method=DAVMethod.OPTIONS,
            url=str(self.url_for(path)),
            headers=self._headers(),
        )

    # =========================================================================
    # Response parsers
    # =========================================================================

    def parse_multistatus(self, body: bytes) -> MultistatusResponse:
        return parse_multistatus(body, huge_tree=self.huge_tree)

    def parse_propfind(
        self, body: bytes, requested_url: Union[str, URL, None] = None
    ) -> List[DavResource]:
        """
        Parse a PROPFIND response.  If the requested URL is given, the
        resource matching it is moved to the front of the list, the
        children keep the order given by the server.
        """
        resources = parse_propfind_response(body, huge_tree=self.huge_tree)
        if requested_url is None:
            return resources
        requested_path = normalize_path(URL.objectify(requested_url).path)
        for idx, resource in enumerate(resources):
            if resource.path == requested_path:
                if idx:
                    resources.insert(0, resources.pop(idx))
                break
        return resources

    def parse_proppatch(self, body: bytes) -> Dict:
        return parse_proppatch_failures(body, huge_tree=self.huge_tree)
