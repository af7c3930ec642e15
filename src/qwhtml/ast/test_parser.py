import pytest

from qwhtml.ast import Attribute, Element, If, Literal, Splice, parse_file, parse_json_text, parse_yaml_text
from qwhtml.exceptions import TemplateLoadError

SAMPLE = """name: greeting
nodes:
  - kind: element
    name: p
    attrs:
      - name: class
        value:
          - kind: literal
            text: note
    children:
      - kind: splice
        expr: name
  - kind: if
    cond: admin
    then:
      - kind: literal
        text: "!"
    else:
      - kind: literal
        text: "."
"""


def test_parse_document():
    doc = parse_yaml_text(SAMPLE)

    assert doc.name == "greeting"
    p, branch = doc.nodes

    assert isinstance(p, Element)
    assert p.name == "p"
    assert p.attrs == [Attribute(name="class", value=[Literal(text="note")])]
    assert p.children == [Splice(expr="name")]
    assert p.children[0].escape is True

    assert isinstance(branch, If)
    assert branch.cond == "admin"
    assert branch.then == [Literal(text="!")]
    assert branch.else_ == [Literal(text=".")]


def test_parse_bare_node_list():
    doc = parse_yaml_text("- kind: literal\n  text: hi\n- kind: element\n  name: br\n")
    assert doc.name is None
    assert doc.nodes == [Literal(text="hi"), Element(name="br")]
    assert doc.nodes[1].children is None


def test_missing_else_is_none():
    doc = parse_yaml_text("- kind: if\n  cond: x\n")
    assert doc.nodes[0].else_ is None
    assert doc.nodes[0].then == []


def test_parse_json():
    doc = parse_json_text('{"nodes": [{"kind": "for", "pattern": "x", "iterable": "xs"}]}')
    (loop,) = doc.nodes
    assert loop.pattern == "x"
    assert loop.body == []


def test_unknown_kind_raises():
    with pytest.raises(TemplateLoadError):
        parse_yaml_text("- kind: marquee\n  text: hi\n")


def test_unknown_field_raises():
    with pytest.raises(TemplateLoadError, match="page.yaml"):
        parse_yaml_text("- kind: literal\n  txt: hi\n", source="page.yaml")


def test_invalid_yaml_raises():
    with pytest.raises(TemplateLoadError):
        parse_yaml_text("nodes: [unclosed")


def test_parse_file_by_suffix(tmp_path):
    yaml_path = tmp_path / "page.yaml"
    yaml_path.write_text("- kind: literal\n  text: hi\n")
    json_path = tmp_path / "page.json"
    json_path.write_text('[{"kind": "literal", "text": "hi"}]')

    assert parse_file(yaml_path).nodes == [Literal(text="hi")]
    assert parse_file(json_path).nodes == [Literal(text="hi")]


def test_parse_missing_file_raises(tmp_path):
    with pytest.raises(TemplateLoadError):
        parse_file(tmp_path / "missing.yaml")
