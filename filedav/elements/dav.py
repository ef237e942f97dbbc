#!/usr/bin/env python
from typing import ClassVar

from .base import BaseElement
from .base import ValuedBaseElement
from filedav.lib.namespace import ns


# Operations
class Propfind(BaseElement):
    tag: ClassVar[str] = ns("D", "propfind")


class PropertyUpdate(BaseElement):
    tag: ClassVar[str] = ns("D", "propertyupdate")


# Components / Data


class Prop(BaseElement):
    tag: ClassVar[str] = ns("D", "prop")


class Allprop(BaseElement):
    tag: ClassVar[str] = ns("D", "allprop")


class Collection(BaseElement):
    tag: ClassVar[str] = ns("D", "collection")


class Set(BaseElement):
    tag: ClassVar[str] = ns("D", "set")


class Remove(BaseElement):
    tag: ClassVar[str] = ns("D", "remove")


# Properties
class ResourceType(BaseElement):
    tag: ClassVar[str] = ns("D", "resourcetype")


class DisplayName(ValuedBaseElement):
    tag: ClassVar[str] = ns("D", "displayname")


class GetEtag(ValuedBaseElement):
    tag: ClassVar[str] = ns("D", "getetag")


class GetContentLength(ValuedBaseElement):
    tag: ClassVar[str] = ns("D", "getcontentlength")


class GetContentType(ValuedBaseElement):
    tag: ClassVar[str] = ns("D", "getcontenttype")


class GetContentLanguage(ValuedBaseElement):
    tag: ClassVar[str] = ns("D", "getcontentlanguage")


class GetLastModified(ValuedBaseElement):
    tag: ClassVar[str] = ns("D", "getlastmodified")


class CreationDate(ValuedBaseElement):
    tag: ClassVar[str] = ns("D", "creationdate")


## RFC 4331
class QuotaAvailableBytes(ValuedBaseElement):
    tag: ClassVar[str] = ns("D", "quota-available-bytes")


class QuotaUsedBytes(ValuedBaseElement):
    tag: ClassVar[str] = ns("D", "quota-used-bytes")


# Multistatus
class Href(BaseElement):
    tag: ClassVar[str] = ns("D", "href")


class Response(BaseElement):
    tag: ClassVar[str] = ns("D", "response")


class Status(BaseElement):
    tag: ClassVar[str] = ns("D", "status")


class PropStat(BaseElement):
    tag: ClassVar[str] = ns("D", "propstat")


class MultiStatus(BaseElement):
    tag: ClassVar[str] = ns("D", "multistatus")


class ResponseDescription(ValuedBaseElement):
    tag: ClassVar[str] = ns("D", "responsedescription")
