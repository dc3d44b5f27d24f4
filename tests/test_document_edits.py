import pytest

from emitter import EmitError, EmitOptions, Edit, emit_document, emit_node
from jstree import (
    Document,
    NodeKind,
    TreeError,
    build_arrow_function,
    build_identifier,
    build_import_default,
    build_jsx_element,
    build_jsx_spread_attribute,
    build_object_expression,
    build_property,
    build_variable_declarator,
    kind_of,
    member_path,
)
from parser import ParseError, parse_js


def _first(document: Document, node_type: str):
    return document.find_type(node_type)[0]


def test_parse_js_collects_comments_and_ranges():
    result = parse_js("// head\nconst a = <b />; /* tail */\n", source_name="page.js")
    assert result.ast["type"] == "Program"
    assert [comment["value"] for comment in result.comments] == [" head", " tail "]
    declaration = result.ast["body"][0]
    start, end = declaration["range"]
    assert result.source[start:end] == "const a = <b />;"


def test_parse_js_raises_with_location():
    with pytest.raises(ParseError) as excinfo:
        parse_js("const a = ;\n", source_name="broken.js")
    assert excinfo.value.source_name == "broken.js"
    assert excinfo.value.line == 1
    assert "broken.js:1" in str(excinfo.value)


@pytest.mark.parametrize(
    "source, kind",
    [
        ("require('x');", NodeKind.CALL_EXPRESSION),
        ("a.b;", NodeKind.MEMBER_EXPRESSION),
        ("'text';", NodeKind.STRING_LITERAL),
        ("42;", NodeKind.OTHER),
        ("`t${x}`;", NodeKind.TEMPLATE_LITERAL),
        ("ident;", NodeKind.IDENTIFIER),
        ("a = b;", NodeKind.ASSIGNMENT),
        ("x => x;", NodeKind.OTHER),
    ],
)
def test_kind_of_expression_statements(source, kind):
    statement = Document.parse(source).ast["body"][0]
    assert kind_of(statement["expression"]) is kind


def test_kind_of_module_declarations():
    body = Document.parse("import a from 'a';\nexport default a;\n").ast["body"]
    assert kind_of(body[0]) is NodeKind.IMPORT
    assert kind_of(body[1]) is NodeKind.EXPORT_DECLARATION


def test_member_path():
    document = Document.parse("module.exports = a;\nmodule['exports'] = b;\n")
    first, second = [stmt["expression"]["left"] for stmt in document.ast["body"]]
    assert member_path(first) == "module.exports"
    assert member_path(second) is None


def test_untouched_document_prints_original_text():
    source = "const a   =  1 ;\n\n// c\nfoo( a );\n"
    assert Document.parse(source).print() == source


def test_replace_keeps_surrounding_text():
    source = "const a = 1, b = 2;\n"
    document = Document.parse(source)
    location = document.find_type(
        "VariableDeclarator", lambda loc: loc.node["id"]["name"] == "b"
    )[0]
    document.replace(location, build_variable_declarator(location.node["id"], build_identifier("c")))
    assert document.print() == "const a = 1, b = c;\n"
    assert document.ast["body"][0]["declarations"][1]["init"]["name"] == "c"


def test_replace_indents_generated_code_like_the_original_line():
    source = "function f() {\n  const a = require('x');\n}\n"
    document = Document.parse(source)
    location = _first(document, "VariableDeclarator")
    stub = build_object_expression(
        [build_property("A", build_identifier("b")), build_property("C", build_identifier("d"))]
    )
    document.replace(location, build_variable_declarator(location.node["id"], stub))
    assert document.print() == "function f() {\n  const a = {\n    A: b,\n    C: d\n  };\n}\n"


def test_insert_after_nested_statement():
    source = "function f() {\n  const a = 1;\n  return a;\n}\n"
    document = Document.parse(source)
    statement = _first(document, "VariableDeclaration")
    document.insert_after(statement, build_import_default("L", "l"))
    assert document.print() == (
        "function f() {\n  const a = 1;\n  import L from 'l';\n  return a;\n}\n"
    )


def test_insert_after_requires_statement_list():
    document = Document.parse("for (var i = 0; i < 1; i++) {}\n")
    declaration = _first(document, "VariableDeclaration")
    with pytest.raises(TreeError):
        document.insert_after(declaration, build_import_default("L", "l"))


def test_replace_rejects_detached_locations():
    document = Document.parse("const a = require(require('x'));\n")
    outer, = document.find_type("VariableDeclarator")
    inner_call = document.find(
        lambda loc: loc.node.get("type") == "CallExpression" and loc.key == "arguments"
    )[0]
    document.replace(outer, build_variable_declarator(outer.node["id"], build_identifier("b")))
    with pytest.raises(TreeError):
        document.replace(inner_call, build_identifier("c"))


def test_replace_rejects_shared_nodes():
    document = Document.parse("const a = 1;\n")
    location = _first(document, "VariableDeclarator")
    shared = build_identifier("x")
    init = build_object_expression([build_property("A", shared), build_property("B", shared)])
    with pytest.raises(TreeError):
        document.replace(location, build_variable_declarator(location.node["id"], init))


def test_replace_rejects_nodes_already_in_tree():
    document = Document.parse("const a = b;\nconst c = 1;\n")
    first, second = document.find_type("VariableDeclarator")
    with pytest.raises(TreeError):
        document.replace(second, build_variable_declarator(second.node["id"], first.node["init"]))


def test_leading_comments_exclude_trailing_comment_of_previous_statement():
    source = "a(); // trailing\n/* lead */\n// lead 2\nb();\n"
    document = Document.parse(source)
    statements = document.find(lambda loc: loc.is_top_level_statement)
    comments = document.leading_comments(statements[1])
    assert [comment["value"] for comment in comments] == [" lead ", " lead 2"]


def test_emit_node_for_synthesized_stub():
    stub = build_arrow_function(
        [build_identifier("props")],
        build_jsx_element("div", [build_jsx_spread_attribute(build_identifier("props"))]),
    )
    assert emit_node(stub) == "(props) => <div {...props}></div>"
    assert emit_node(stub, options=EmitOptions(arrow_parens=False)) == "props => <div {...props}></div>"


def test_emit_node_options():
    node = build_object_expression([build_property("A", build_identifier("b"))])
    assert emit_node(node, options=EmitOptions(trailing_comma=True, indent="    ")) == "{\n    A: b,\n}"
    assert emit_node(build_import_default("Layout", "@theme/Layout"), options=EmitOptions(quote='"')) == (
        'import Layout from "@theme/Layout";'
    )


def test_emit_document_rejects_overlapping_edits():
    edits = [
        Edit(start=0, end=5, node=build_identifier("a")),
        Edit(start=3, end=6, node=build_identifier("b")),
    ]
    with pytest.raises(EmitError):
        emit_document("0123456789", edits)


def test_emit_rejects_unknown_synthesized_nodes():
    with pytest.raises(EmitError):
        emit_node({"type": "WithStatement"})


def test_replace_statement_consumes_its_leading_comments():
    source = "// head\nfoo();\n// about bar\nbar();\n"
    document = Document.parse(source)
    second = document.find(lambda loc: loc.is_top_level_statement)[1]
    replacement = build_import_default("L", "l")
    document.replace(second, replacement)
    assert document.ast["body"][1] is replacement
    assert document.print() == "// head\nfoo();\nimport L from 'l';\n"


def test_enclosing_statement_is_held_by_a_statement_list():
    document = Document.parse(
        "export const a = require('x');\nfor (var b = require('y');;) {\n  break;\n}\n"
    )
    exported, looped = document.find_type("VariableDeclarator")
    assert exported.enclosing_statement().node["type"] == "ExportNamedDeclaration"
    assert looped.enclosing_statement().node["type"] == "ForStatement"
    assert exported.enclosing_statement().in_statement_list
