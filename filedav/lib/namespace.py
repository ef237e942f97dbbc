#!/usr/bin/env python
from typing import Dict
from typing import Optional
from typing import Tuple

nsmap: Dict[str, str] = {
    "D": "DAV:",
}


def ns(prefix: str, tag: Optional[str] = None) -> str:
    name = "{%s}" % nsmap[prefix]
    if tag is not None:
        name = "%s%s" % (name, tag)
    return name


def split_tag(tag: str) -> Tuple[str, str]:
    """
    Splits a Clark notation tag like ``{DAV:}getetag`` into
    ``("DAV:", "getetag")``.  A tag without namespace gives an empty
    namespace string.
    """
    if tag.startswith("{"):
        namespace, _, name = tag[1:].partition("}")
        return (namespace, name)
    return ("", tag)


def clark(namespace: str, name: str) -> str:
    """The inverse of split_tag"""
    if not namespace:
        return name
    return "{%s}%s" % (namespace, name)
