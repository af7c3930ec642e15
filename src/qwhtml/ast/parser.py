from __future__ import annotations

from pathlib import Path
from typing import List, Union

import msgspec

from qwhtml.ast.node import Document, Node
from qwhtml.exceptions import TemplateLoadError

_Source = Union[Document, List[Node]]


def _document(decoded: _Source) -> Document:
    if isinstance(decoded, Document):
        return decoded
    return Document(nodes=decoded)


def parse_yaml_text(text: str, source: str = "<string>") -> Document:
    """Decode a YAML template into a `Document`.

    The top level is either a mapping with a ``nodes`` list or a bare list
    of nodes.
    """
    try:
        return _document(msgspec.yaml.decode(text, type=_Source))
    except msgspec.DecodeError as e:
        raise TemplateLoadError(source, str(e)) from e


def parse_json_text(text: str, source: str = "<string>") -> Document:
    try:
        return _document(msgspec.json.decode(text, type=_Source))
    except msgspec.DecodeError as e:
        raise TemplateLoadError(source, str(e)) from e


def parse_file(path: str | Path) -> Document:
    """Load a template from a .json, .yaml or .yml file."""

    p = Path(path)
    try:
        text = p.read_text()
    except OSError as e:
        raise TemplateLoadError(str(p), e.strerror or str(e)) from e

    if p.suffix == ".json":
        return parse_json_text(text, source=str(p))
    return parse_yaml_text(text, source=str(p))
