"""XML bridge built on xml.etree.ElementTree."""

import json
import logging
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from ..decoder import ToonDecoder
from ..encoder import ToonEncoder
from ..options import ToonOptions
from ..types import ConversionError, ConverterInterface, ErrorType

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
_XML_NAME_PATTERN = re.compile(r"[A-Za-z_][\w.\-]*")
_FORBIDDEN_DECLARATIONS = ("<!DOCTYPE", "<!ENTITY")


class ArrayDetection(Enum):
    """How repeated child elements map to arrays."""
    AUTO = "auto"      # arrays only for repeated names
    ALWAYS = "always"  # every child group becomes an array
    NEVER = "never"    # keep the first element of a repeated group


@dataclass(frozen=True)
class XmlConversionOptions:
    """
    Options for converting between XML and TOON.

    Attributes:
        toon_options: Options for the TOON side of the conversion
        attribute_prefix: Key prefix marking attributes (default: "@")
        text_node_key: Key holding element text next to other fields (default: "#text")
        include_attributes: Read attributes from XML input (default: True)
        array_detection: Mapping of repeated elements (default: AUTO)
        root_element_name: Root tag when the value has no single root field
        pretty_print: Indent the XML output (default: True)
        xml_declaration: Start the XML output with a declaration (default: True)
        indent: Spaces per level in pretty XML output (default: 2)
    """
    toon_options: ToonOptions = field(default_factory=lambda: ToonOptions.DEFAULT)
    attribute_prefix: str = "@"
    text_node_key: str = "#text"
    include_attributes: bool = True
    array_detection: ArrayDetection = ArrayDetection.AUTO
    root_element_name: str = "root"
    pretty_print: bool = True
    xml_declaration: bool = True
    indent: int = 2


class XmlToToonConverter(ConverterInterface):
    """
    Converts XML documents to TOON text.

    The document becomes a single-field object keyed by the root tag.
    Attributes become prefixed fields, child elements are grouped by tag
    and element text is stored under the text key; an element holding
    only text collapses to the text itself.
    """

    def __init__(self, options: Optional[XmlConversionOptions] = None,
                 logger: Optional[logging.Logger] = None):
        self.options = options or XmlConversionOptions()
        self.logger = logger or logging.getLogger(__name__)
        self.encoder = ToonEncoder(self.options.toon_options, self.logger)

    def convert(self, source: str) -> str:
        """
        Convert an XML document to TOON.

        Raises:
            ConversionError: If the document is malformed or declares a DTD
        """
        return self.encoder.encode(self.to_value(source))

    def to_value(self, source: str) -> Dict[str, Any]:
        """Parse an XML document into a value tree."""
        if any(marker in source for marker in _FORBIDDEN_DECLARATIONS):
            raise ConversionError("DOCTYPE and entity declarations are not allowed",
                                  ErrorType.SYNTAX)
        try:
            root = ET.fromstring(source)
        except ET.ParseError as e:
            raise ConversionError(f"Failed to parse XML: {e}", ErrorType.SYNTAX, context=e) from e

        self.logger.debug(f"Parsed XML document with root <{root.tag}>")
        return {root.tag: self._build_value(root)}

    def _build_value(self, element: ET.Element) -> Any:
        node: Dict[str, Any] = {}

        if self.options.include_attributes:
            for name, value in element.attrib.items():
                node[f"{self.options.attribute_prefix}{name}"] = value

        for tag, children in self._group_children(element).items():
            if self._should_convert_to_array(children):
                node[tag] = [self._build_value(child) for child in children]
            else:
                node[tag] = self._build_value(children[0])

        text = self._text_content(element)
        if text:
            node[self.options.text_node_key] = text

        if len(node) == 1 and self.options.text_node_key in node:
            return node[self.options.text_node_key]
        return node

    def _group_children(self, element: ET.Element) -> Dict[str, List[ET.Element]]:
        groups: Dict[str, List[ET.Element]] = {}
        for child in element:
            groups.setdefault(child.tag, []).append(child)
        return groups

    def _should_convert_to_array(self, elements: List[ET.Element]) -> bool:
        detection = self.options.array_detection
        if detection == ArrayDetection.ALWAYS:
            return True
        if detection == ArrayDetection.AUTO:
            return len(elements) > 1
        return False

    def _text_content(self, element: ET.Element) -> str:
        # Direct text only; each text run is trimmed like child whitespace
        parts = [element.text or ""]
        parts.extend(child.tail or "" for child in element)
        return "".join(part.strip() for part in parts)


class ToonToXmlConverter(ConverterInterface):
    """
    Converts TOON text to XML documents.

    A single-field root object names the root element; any other value is
    wrapped in the configured root element. Prefixed keys become
    attributes, the text key becomes element text, arrays repeat their
    element and a bare array becomes ``item`` children.
    """

    def __init__(self, options: Optional[XmlConversionOptions] = None,
                 logger: Optional[logging.Logger] = None):
        self.options = options or XmlConversionOptions()
        self.logger = logger or logging.getLogger(__name__)
        self.decoder = ToonDecoder(self.options.toon_options, self.logger)

    def convert(self, source: str) -> str:
        """
        Convert TOON text to an XML document.

        Raises:
            ToonParseError: If the TOON text cannot be decoded
            ConversionError: If a key is not a valid XML name
        """
        return self.from_value(self.decoder.decode(source))

    def from_value(self, value: Any) -> str:
        """Serialize a value tree as an XML document."""
        if isinstance(value, dict) and len(value) == 1:
            name, content = next(iter(value.items()))
            root = self._build_element(name, content)
        else:
            root = self._build_element(self.options.root_element_name, value)

        if self.options.pretty_print:
            ET.indent(root, space=" " * self.options.indent)

        body = ET.tostring(root, encoding="unicode")
        if not self.options.xml_declaration:
            return body
        separator = "\n" if self.options.pretty_print else ""
        return f"{XML_DECLARATION}{separator}{body}"

    def _build_element(self, name: str, value: Any) -> ET.Element:
        element = ET.Element(self._element_name(name))
        self._fill_element(element, value)
        return element

    def _fill_element(self, element: ET.Element, value: Any) -> None:
        prefix = self.options.attribute_prefix

        if isinstance(value, dict):
            text = None
            for key, item in value.items():
                if prefix and key.startswith(prefix):
                    element.set(self._element_name(key[len(prefix):]), self._text_value(item))
                elif key == self.options.text_node_key:
                    text = self._text_value(item)
                elif isinstance(item, list):
                    for entry in item:
                        element.append(self._build_element(key, entry))
                else:
                    element.append(self._build_element(key, item))
            if text is not None:
                element.text = text

        elif isinstance(value, list):
            for entry in value:
                element.append(self._build_element("item", entry))

        else:
            element.text = self._text_value(value)

    def _element_name(self, name: str) -> str:
        if not _XML_NAME_PATTERN.fullmatch(name):
            raise ConversionError(f"Key {name!r} is not a valid XML name")
        return name

    def _text_value(self, value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (dict, list)):
            return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
        return str(value)
