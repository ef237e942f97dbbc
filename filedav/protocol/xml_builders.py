"""
Pure functions for building WebDAV XML request bodies.

All functions in this module are pure - they take data in and return XML out,
with no side effects or I/O.
"""
from typing import Any
from typing import Iterable
from typing import List
from typing import Mapping
from typing import Optional
from typing import Tuple
from typing import Union

from lxml import etree

from filedav.elements import dav
from filedav.elements.base import BaseElement
from filedav.elements.base import CustomProperty
from filedav.lib.namespace import nsmap
from filedav.lib.namespace import split_tag

## A property name may be given as Clark notation ("{ns}name"), as a
## (namespace, name) tuple, or as a bare name in the DAV: namespace
PropName = Union[str, Tuple[str, str]]


def prop_key(prop_name: PropName) -> Tuple[str, str]:
    """
    Normalizes a property name to a (namespace, local name) tuple.
    """
    if isinstance(prop_name, tuple):
        namespace, name = prop_name
    elif prop_name.startswith("{"):
        namespace, name = split_tag(prop_name)
    else:
        namespace, name = nsmap["D"], prop_name
    if not name:
        raise ValueError("empty property name in %r" % (prop_name,))
    return (namespace, name)


def _prop_name_to_element(
    prop_name: PropName, value: Any = None
) -> BaseElement:
    namespace, name = prop_key(prop_name)
    return CustomProperty(namespace, name, value)


def build_propfind_body(
    props: Optional[Iterable[PropName]] = None,
) -> bytes:
    """
    Build PROPFIND request body XML.

    Args:
        props: Property names to retrieve.  If None, all properties
            are requested with DAV:allprop.

    Returns:
        UTF-8 encoded XML bytes
    """
    if props is None:
        propfind = dav.Propfind() + dav.Allprop()
    else:
        prop_elements = [_prop_name_to_element(prop_name) for prop_name in props]
        propfind = dav.Propfind() + (dav.Prop() + prop_elements)

    return etree.tostring(propfind.xmlelement(), encoding="utf-8", xml_declaration=True)


def build_proppatch_body(
    set_props: Optional[Mapping[PropName, Any]] = None,
    remove_props: Optional[Iterable[PropName]] = None,
) -> bytes:
    """
    Build PROPPATCH request body for setting and removing properties.

    Each property gets its own set/remove block, as the server
    processes the instructions in document order.

    Args:
        set_props: Properties to set (name -> value).  Values other
            than strings are sent as str(value)
        remove_props: Properties to remove

    Returns:
        UTF-8 encoded XML bytes
    """
    propertyupdate = dav.PropertyUpdate()
    instructions: List[BaseElement] = []

    for name, value in (set_props or {}).items():
        instructions.append(dav.Set() + (dav.Prop() + _prop_name_to_element(name, value)))
    for name in remove_props or []:
        instructions.append(dav.Remove() + (dav.Prop() + _prop_name_to_element(name)))

    if not instructions:
        raise ValueError("PROPPATCH needs at least one property to set or remove")
    propertyupdate += instructions

    return etree.tostring(
        propertyupdate.xmlelement(), encoding="utf-8", xml_declaration=True
    )
