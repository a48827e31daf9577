"""
=============================================================================
RESPONSE PROCESSORS PACKAGE
=============================================================================

One processor per output format:

    ┌──────────────┬──────────────────────────────────────┬──────────────┐
    │ Processor    │ Handles                              │ Content-Type │
    ├──────────────┼──────────────────────────────────────┼──────────────┤
    │ JSONProcessor│ application/json, application/json-*,│ application/ │
    │              │ */*+json, Ajax requests              │ json         │
    │ XMLProcessor │ */xml, */*+xml                       │ application/ │
    │              │                                      │ xml          │
    │ CSVProcessor │ text/csv, text/*                     │ text/csv     │
    │ TXTProcessor │ text/plain, text/*                   │ text/plain   │
    └──────────────┴──────────────────────────────────────┴──────────────┘

The factory functions below are shorthands:

    json()                 JSONProcessor()
    indented_json("  ")    JSONProcessor(indent="  ")
    xml()                  XMLProcessor()
    indented_xml("  ")     XMLProcessor(indent="  ")
    csv(";")               CSVProcessor(comma=";")
    txt()                  TXTProcessor()

=============================================================================
"""

from typing import Optional, Union

from .base import ResponseProcessor, no_content, write_with_newline
from .csv_processor import CSVProcessor
from .json_processor import JSONProcessor
from .txt_processor import TXTProcessor
from .xml_processor import XMLProcessor, to_element


def json() -> JSONProcessor:
    return JSONProcessor()


def indented_json(indent: Union[str, int] = "  ") -> JSONProcessor:
    return JSONProcessor(indent=indent)


def xml(root_tag: str = "root") -> XMLProcessor:
    return XMLProcessor(root_tag=root_tag)


def indented_xml(indent: Union[str, int] = "  ", root_tag: str = "root") -> XMLProcessor:
    return XMLProcessor(indent=indent, root_tag=root_tag)


def csv(comma: Optional[str] = None) -> CSVProcessor:
    """A CSV processor; comma defaults to ","."""
    return CSVProcessor(comma=comma or ",")


def txt() -> TXTProcessor:
    return TXTProcessor()


__all__ = [
    # Base
    "ResponseProcessor",
    "no_content",
    "write_with_newline",

    # Processors
    "JSONProcessor",
    "XMLProcessor",
    "CSVProcessor",
    "TXTProcessor",
    "to_element",

    # Factories
    "json",
    "indented_json",
    "xml",
    "indented_xml",
    "csv",
    "txt",
]
