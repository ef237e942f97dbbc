"""
Pure functions for parsing WebDAV XML responses.

All functions in this module are pure - they take XML bytes in and return
structured data out, with no side effects or I/O.
"""

from __future__ import annotations

import logging
from datetime import datetime
from email.utils import parsedate_to_datetime
from typing import Any
from urllib.parse import unquote

from dateutil.parser import isoparse
from lxml import etree
from lxml.etree import _Element

from filedav.elements import dav
from filedav.lib import error
from filedav.lib.namespace import clark
from filedav.lib.namespace import split_tag
from filedav.lib.python_utilities import to_wire
from filedav.lib.url import URL
from filedav.resource import DavResource

from .types import MultistatusEntry, MultistatusResponse, PropStatGroup

log = logging.getLogger(__name__)

## Properties that are mapped to DavResource attributes.  Everything
## else ends up in DavResource.custom_properties
STANDARD_PROPS = {
    dav.ResourceType.tag,
    dav.GetContentLength.tag,
    dav.GetContentType.tag,
    dav.GetContentLanguage.tag,
    dav.DisplayName.tag,
    dav.GetEtag.tag,
    dav.GetLastModified.tag,
    dav.CreationDate.tag,
    dav.QuotaAvailableBytes.tag,
    dav.QuotaUsedBytes.tag,
}


def parse_multistatus(
    body: bytes,
    huge_tree: bool = False,
) -> MultistatusResponse:
    """
    Parse a 207 Multi-Status response body.

    Args:
        body: Raw XML response bytes
        huge_tree: Allow parsing very large XML documents

    Returns:
        Structured MultistatusResponse, responses in document order

    Raises:
        MalformedResponse: If body is not valid XML, or if it is not
            a multistatus document, or if a response lacks the href
    """
    tree = _parse_xml(body, huge_tree=huge_tree)

    responses: list[MultistatusEntry] = []
    description: str | None = None

    for elem in _strip_to_multistatus(tree):
        if elem.tag == dav.ResponseDescription.tag:
            description = elem.text
            continue

        if elem.tag != dav.Response.tag:
            error.weirdness("unexpected element found in multistatus", elem)
            continue

        responses.append(_parse_response_element(elem))

    return MultistatusResponse(responses=responses, description=description)


def parse_propfind_response(
    body: bytes,
    huge_tree: bool = False,
) -> list[DavResource]:
    """
    Parse a PROPFIND response into DavResource objects.

    Args:
        body: Raw XML response bytes
        huge_tree: Allow parsing very large XML documents

    Returns:
        One DavResource per DAV:response element, in document order
    """
    if not body or not body.strip():
        return []
    result = parse_multistatus(body, huge_tree=huge_tree)
    return [resource_from_entry(entry) for entry in result.responses]


def parse_proppatch_failures(
    body: bytes,
    huge_tree: bool = False,
) -> dict[tuple[str, str], int]:
    """
    Find properties a PROPPATCH was not able to set or remove.

    Returns:
        (namespace, name) -> status code for every property with a
        non-2xx status.  Empty if everything went through.
    """
    failures: dict[tuple[str, str], int] = {}
    if not body or not body.strip():
        return failures
    result = parse_multistatus(body, huge_tree=huge_tree)
    for entry in result.responses:
        for propstat in entry.propstats:
            if 200 <= propstat.status < 300:
                continue
            for tag in propstat.properties:
                failures[split_tag(tag)] = propstat.status
    return failures


def resource_from_entry(entry: MultistatusEntry) -> DavResource:
    """
    Builds a DavResource from one multistatus entry.

    Only propstat groups with status 200 contribute values.  If there
    are several such groups, the first one delivering a property wins,
    later groups only fill in properties not seen yet.
    """
    found: dict[str, _Element] = {}
    failures: dict[tuple[str, str], int] = {}
    for propstat in entry.propstats:
        if propstat.status != 200:
            for tag in propstat.properties:
                failures.setdefault(split_tag(tag), propstat.status)
            continue
        for tag, elem in propstat.properties.items():
            found.setdefault(tag, elem)

    resource = DavResource(href=entry.href)
    if entry.status is not None:
        resource.status = entry.status
    resource.propstat_failures = {
        key: status for key, status in failures.items() if clark(*key) not in found
    }

    resourcetype = found.get(dav.ResourceType.tag)
    resource.is_directory = (
        resourcetype is not None and resourcetype.find(dav.Collection.tag) is not None
    )
    if not resource.is_directory:
        resource.content_length = _parse_int(_text(found.get(dav.GetContentLength.tag)))
    resource.content_type = _text(found.get(dav.GetContentType.tag))
    resource.content_language = _text(found.get(dav.GetContentLanguage.tag))
    resource.display_name = _text(found.get(dav.DisplayName.tag))
    resource.etag = _text(found.get(dav.GetEtag.tag))
    resource.modified = parse_rfc1123(_text(found.get(dav.GetLastModified.tag)))
    resource.created = parse_iso8601(_text(found.get(dav.CreationDate.tag)))
    resource.quota_available_bytes = _parse_int(
        _text(found.get(dav.QuotaAvailableBytes.tag))
    )
    resource.quota_used_bytes = _parse_int(_text(found.get(dav.QuotaUsedBytes.tag)))

    for tag, elem in found.items():
        if tag in STANDARD_PROPS:
            continue
        resource.custom_properties[split_tag(tag)] = _element_to_value(elem)

    return resource


def parse_rfc1123(value: str | None) -> datetime | None:
    """
    Parses a HTTP date like "Sat, 12 Oct 2024 10:00:00 GMT".  Returns
    None rather than raising if the value can't be parsed.
    """
    if not value:
        return None
    try:
        return parsedate_to_datetime(value.strip())
    except (TypeError, ValueError, IndexError):
        log.debug("could not parse RFC 1123 date %r", value)
        return None


def parse_iso8601(value: str | None) -> datetime | None:
    """
    Parses a creationdate like "2024-10-12T10:00:00Z".  Returns None
    rather than raising if the value can't be parsed.
    """
    if not value:
        return None
    try:
        return isoparse(value.strip())
    except (TypeError, ValueError, OverflowError):
        log.debug("could not parse ISO 8601 date %r", value)
        return None


# Helper functions


def _parse_xml(body: bytes, huge_tree: bool = False) -> _Element:
    parser = etree.XMLParser(remove_blank_text=True, huge_tree=huge_tree)
    try:
        return etree.fromstring(to_wire(body), parser)
    except etree.XMLSyntaxError as e:
        raise error.MalformedResponse(reason="invalid XML: %s" % e) from e


def _strip_to_multistatus(tree: _Element) -> _Element:
    """
    Strip outer elements to get to the multistatus content.

    The general format is:
        <xml><multistatus>
            <response>...</response>
            <response>...</response>
        </multistatus></xml>

    But sometimes the xml element is missing.  Returns the element
    containing responses.
    """
    if tree.tag == "xml" and len(tree) > 0 and tree[0].tag == dav.MultiStatus.tag:
        return tree[0]
    if tree.tag == dav.MultiStatus.tag:
        return tree
    raise error.MalformedResponse(
        reason="expected a DAV:multistatus document, got %s" % tree.tag
    )


def _parse_response_element(response: _Element) -> MultistatusEntry:
    """
    Parse a single DAV:response element.

    One response should contain one href, and either zero or more
    propstats or a status.
    """
    status: int | None = None
    href: str | None = None
    propstats: list[PropStatGroup] = []

    for elem in response:
        if elem.tag == dav.Href.tag:
            if href is not None:
                error.weirdness("more than one href in a response", response)
                continue
            href = _normalize_href(elem.text)
        elif elem.tag == dav.Status.tag:
            status = _status_to_code(elem.text)
        elif elem.tag == dav.PropStat.tag:
            propstats.append(_parse_propstat(elem))
        elif elem.tag == dav.ResponseDescription.tag:
            continue
        else:
            error.weirdness("unexpected element found in response", elem)

    if not href:
        raise error.MalformedResponse(reason="response element without href")
    return MultistatusEntry(href=href, propstats=propstats, status=status)


def _parse_propstat(propstat: _Element) -> PropStatGroup:
    status_elem = propstat.find(dav.Status.tag)
    if status_elem is None:
        error.weirdness("propstat without status, assuming 200", propstat)
        code = 200
    else:
        code = _status_to_code(status_elem.text)

    properties: dict[str, Any] = {}
    for prop in propstat.iterfind(dav.Prop.tag):
        for child in prop:
            ## comments and processing instructions have non-string tags
            if isinstance(child.tag, str):
                properties[child.tag] = child
    return PropStatGroup(status=code, properties=properties)


def _normalize_href(text: str | None) -> str:
    """
    URL-decodes an href.  Absolute URLs are reduced to their path.
    """
    text = (text or "").strip()
    if not text:
        return ""
    # Fix for double-encoded URLs (e.g., Confluence)
    if "%2540" in text:
        text = text.replace("%2540", "%40")
    if "://" in text:
        text = URL(text).path
    return unquote(text)


def _status_to_code(status: str | None) -> int:
    """
    Extract status code from status string like "HTTP/1.1 200 OK".

    Args:
        status: Status string

    Returns:
        Integer status code

    Raises:
        MalformedResponse: if no status code can be found
    """
    parts = (status or "").split()
    if len(parts) >= 2:
        try:
            return int(parts[1])
        except ValueError:
            pass
    raise error.MalformedResponse(reason="invalid status line %r" % status)


def _text(elem: _Element | None) -> str | None:
    if elem is None or elem.text is None:
        return None
    return elem.text.strip() or None


def _parse_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        log.debug("not an integer: %r", value)
        return None


def _element_to_value(elem: _Element) -> str:
    """
    The value of a property we know nothing about.  Plain text for
    simple elements, serialized inner XML for elements with children.
    """
    if len(elem) == 0:
        return elem.text or ""
    inner = [elem.text or ""]
    for child in elem:
        inner.append(etree.tostring(child, encoding="unicode", with_tail=True))
    return "".join(inner)
