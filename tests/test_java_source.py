from evaluator.java_source import JavaSource

from java_samples import CALCULATOR, COUNTER, LONG_METHOD


def test_method_counts():
    src = JavaSource(CALCULATOR)
    # constructors are not counted as methods
    assert src.method_count == 1
    assert src.documented_method_count == 1
    assert src.has_class_doc


def test_doc_comment_does_not_reach_a_later_class():
    src = JavaSource("/** helper */\nclass Helper {}\npublic class Main {}")
    assert not src.has_class_doc


def test_field_modifiers():
    assert JavaSource(CALCULATOR).private_field_count == 1
    assert JavaSource(CALCULATOR).public_field_count == 0
    assert JavaSource(COUNTER).public_field_count == 1
    assert JavaSource(COUNTER).private_field_count == 0


def test_method_lengths():
    assert JavaSource(LONG_METHOD).method_lengths == [39]
    assert max(JavaSource(CALCULATOR).method_lengths) < 20


def test_inline_comments():
    src = JavaSource("int a; // one\nint b; // two\nint c;")
    assert src.inline_comment_count == 2
    assert src.line_count == 3


def test_catch_blocks():
    src = JavaSource("try { run(); } catch (IOException e) { }\n"
                     "try { run(); } catch (Exception e) { log(e); }")
    assert src.try_catch_count == 2
    assert src.empty_catch_count == 1


def test_naming_styles():
    src = JavaSource("int my_value = other_value + thirdValue;")
    assert src.snake_case_count == 2
    assert src.camel_case_count > 0


def test_duplicated_blocks():
    assert JavaSource("a();\nb();\nc();\na();\nb();\nc();\n"
                      ).duplicated_block_count == 1
    # the last window of the text is never compared
    assert JavaSource("a();\nb();\nc();\na();\nb();\nc();"
                      ).duplicated_block_count == 0


def test_duplicated_blocks_ignore_imports():
    code = ("import java.util.List;\nimport java.util.Map;\n"
            "import java.util.Set;\n") * 2 + "\n"
    assert JavaSource(code).duplicated_block_count == 0


def test_recursion():
    recursive = JavaSource("public int fact(int n) {\n"
                           "    return n <= 1 ? 1 : n * fact(n - 1);\n"
                           "}\n")
    assert recursive.has_recursion
    assert not JavaSource(CALCULATOR).has_recursion


def test_nested_loops_and_null_checks():
    src = JavaSource("for (int i = 0; i < n; i++) {\n"
                     "    for (int j = 0; j < n; j++) {\n"
                     "        if (grid != null) {}\n")
    assert src.nested_for_count == 1
    assert src.has_null_checks
    assert not JavaSource("String nullable;").has_null_checks
