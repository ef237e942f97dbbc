#!/usr/bin/env python
import logging

__version__ = "0.3.0"

from .davclient import DAVClient
from .resource import DavResource
from .response import ResponseStream

## No output unless the application configures logging
log = logging.getLogger("filedav")


class NullHandler(logging.Handler):
    def emit(self, record) -> None:
        pass


log.addHandler(NullHandler())

__all__ = ["__version__", "DAVClient", "DavResource", "ResponseStream"]
