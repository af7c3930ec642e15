"""Tests for the program printer."""

from qwhtml.ast import For, If, Literal, Splice
from qwhtml.compiler import Builder, Compiler, Printer


def test_print_program_listing():
    template = Compiler().compile(
        [
            Literal("<p>"),
            Splice("name"),
            If(cond="admin", then=[Literal("!")], else_=[]),
            For(pattern="x", iterable="xs", body=[Splice("x", escape=False)]),
        ]
    )

    listing = Printer().render(template)

    assert listing == "\n".join(
        [
            "w.write_str('<p>')",
            "write(Escaper(w), name)",
            "if admin:",
            "  w.write_str('!')",
            "else:",
            "  pass",
            "for x in xs:",
            "  write(w, x)",
            "",
        ]
    )


def test_print_raw_program_uses_given_sink():
    b = Builder()
    b.write("hi")
    assert Printer().render(b.into_instructions(), sink="out") == "out.write_str('hi')\n"


def test_template_sink_overrides_argument():
    b = Builder(sink="buf")
    b.write("hi")
    assert Printer().render(b.into_program(), sink="out") == "buf.write_str('hi')\n"
