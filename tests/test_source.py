import pytest

from evaluator import source, workspace


@pytest.mark.parametrize(
    "code, excepted",
    [
        ("public class Main { }", "Main"),
        ("import java.util.*;\n\npublic   class\tCounter {\n}", "Counter"),
        # the first public class wins
        ("public class A {}\npublic class B {}", "A"),
        ("class Hidden {}", None),
        ("", None),
        ("public interface Shape {}", None),
    ],
)
def test_extract_class_name(code, excepted):
    assert source.extract_class_name(code) == excepted


def test_source_filename():
    assert source.source_filename("PropertyCounter") == "PropertyCounter.java"


def test_materialize_writes_code_verbatim(workspace_root):
    code = "public class Main {\r\n    // café\r\n}\r\n"
    with workspace.allocate(workspace_root) as ws:
        path = source.materialize(ws, code, "Main")
        assert path == ws.path / "Main.java"
        assert path.read_bytes() == code.encode("utf-8")
