import io

from kubeutil.line_delimiter import LineDelimiter


def test_trailing_newline():
    out = io.StringIO()
    with LineDelimiter(out, "|") as ld:
        print("  Hello  \n  World  ", file=ld)
    assert out.getvalue() == "|  Hello  |\n|  World  |\n||\n"


def test_no_trailing_newline():
    out = io.StringIO()
    ld = LineDelimiter(out, "|")
    ld.write("  Hello  \n  World  ")
    ld.flush()
    assert out.getvalue() == "|  Hello  |\n|  World  |\n"


def test_write_returns_length_and_accepts_bytes():
    out = io.StringIO()
    ld = LineDelimiter(out, "<>")
    assert ld.write(b"ab") == 2
    assert ld.write("c") == 1
    assert out.getvalue() == ""
    ld.flush()
    assert out.getvalue() == "<>abc<>\n"


def test_empty_buffer_writes_one_empty_line():
    out = io.StringIO()
    LineDelimiter(out, "#").flush()
    assert out.getvalue() == "##\n"