#!/usr/bin/env python
import sys
from typing import Any
from typing import ClassVar
from typing import List
from typing import Optional
from typing import Union

from lxml import etree
from lxml.etree import _Element

from filedav.lib.namespace import clark
from filedav.lib.namespace import nsmap
from filedav.lib.python_utilities import to_unicode

if sys.version_info < (3, 9):
    from typing import Iterable
else:
    from collections.abc import Iterable

if sys.version_info < (3, 11):
    from typing_extensions import Self
else:
    from typing import Self


class BaseElement:
    children: Optional[List[Self]] = None
    tag: ClassVar[Optional[str]] = None
    value: Optional[str] = None
    attributes: Optional[dict] = None

    def __init__(
        self, name: Optional[str] = None, value: Union[str, bytes, None] = None
    ) -> None:
        self.children = []
        self.attributes = {}
        value = to_unicode(value)
        self.value = None
        if name is not None:
            self.attributes["name"] = name
        if value is not None:
            self.value = value

    def __add__(
        self, other: Union["BaseElement", Iterable["BaseElement"]]
    ) -> "BaseElement":
        return self.append(other)

    def __str__(self) -> str:
        utf8 = etree.tostring(
            self.xmlelement(), encoding="utf-8", xml_declaration=True, pretty_print=True
        )
        return str(utf8, "utf-8")

    def xmlelement(self) -> _Element:
        if self.tag is None:
            raise ValueError("Unexpected value None for self.tag")

        if self.attributes is None:
            raise ValueError("Unexpected value None for self.attributes")

        root = etree.Element(self.tag, nsmap=nsmap)
        if self.value is not None:
            root.text = self.value

        for k in self.attributes:
            root.set(k, self.attributes[k])

        self.xmlchildren(root)
        return root

    def xmlchildren(self, root: _Element) -> None:
        if self.children is None:
            raise ValueError("Unexpected value None for self.children")

        for c in self.children:
            root.append(c.xmlelement())

    def append(self, element: Union[Self, Iterable[Self]]) -> Self:
        if self.children is None:
            raise ValueError("Unexpected value None for self.children")

        if isinstance(element, Iterable):
            self.children.extend(element)
        else:
            self.children.append(element)

        return self


class ValuedBaseElement(BaseElement):
    def __init__(self, value: Union[str, bytes, None] = None) -> None:
        super(ValuedBaseElement, self).__init__(value=value)


class CustomProperty(BaseElement):
    """
    A property in an arbitrary namespace, typically a "dead" property
    set by the client with PROPPATCH.  The tag is given per instance
    rather than per class.
    """

    def __init__(
        self, namespace: str, name: str, value: Any = None
    ) -> None:
        ## numbers and the like are sent as their text form
        if value is not None and not isinstance(value, (str, bytes)):
            value = str(value)
        super(CustomProperty, self).__init__(value=value)
        self.namespace = namespace
        self.name = name
        self.tag = clark(namespace, name)

    def xmlelement(self) -> _Element:
        if self.namespace == nsmap["D"]:
            root = etree.Element(self.tag, nsmap=nsmap)
        else:
            root = etree.Element(self.tag)
        if self.value is not None:
            root.text = self.value
        self.xmlchildren(root)
        return root
