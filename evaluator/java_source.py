"""
Lexical facts about a Java source text.

Everything here is pattern matching over the raw text, not parsing. The
numbers are good enough to drive the quality heuristics and nothing more:
comments and string literals are not skipped, and a declaration split over
unusual line breaks may be missed.
"""

import re
from collections import Counter
from functools import cached_property
from typing import List

_TYPE = r'[\w<>\[\],\s]+'
# doc comment that does not run past its own terminator
_DOC_COMMENT = r'/\*\*(?:(?!\*/).)*\*/'

METHOD_DECLARATION = re.compile(
    rf'(?:public|private|protected)\s+{_TYPE}\s+\w+\s*\(')
METHOD_WITH_BODY = re.compile(
    rf'(?:public|private|protected)\s+{_TYPE}\s+(\w+)\s*\([^)]*\)\s*\{{')
DOCUMENTED_METHOD = re.compile(
    rf'{_DOC_COMMENT}\s*(?:public|private|protected)\s+{_TYPE}\s+\w+\s*\(',
    re.S)
DOCUMENTED_CLASS = re.compile(rf'{_DOC_COMMENT}\s*public\s+class', re.S)
INLINE_COMMENT = re.compile(r'//[^\n]*')
FIELD_DECLARATION = re.compile(
    rf'\s+(private|public|protected)\s+{_TYPE}\s+\w+(?:\s*=\s*[^;]+)?;')
TRY_CATCH = re.compile(r'try\s*\{.*?catch\s*\([^)]*\)\s*\{', re.S)
EMPTY_CATCH = re.compile(r'catch\s*\([^)]*\)\s*\{\s*\}')
CAMEL_CASE = re.compile(r'\b[a-z][a-zA-Z0-9]*\b')
SNAKE_CASE = re.compile(r'\b[a-z][a-zA-Z0-9_]*_[a-zA-Z0-9_]*\b')
MAIN_METHOD = re.compile(r'public\s+static\s+void\s+main')
NESTED_FOR = re.compile(r'for\s*\([^)]*\)\s*\{[^}]*for\s*\([^)]*\)')


class JavaSource:

    def __init__(self, text: str):
        self.text = text

    def __contains__(self, fragment: str) -> bool:
        return fragment in self.text

    def contains_any(self, *fragments: str) -> bool:
        return any(fragment in self.text for fragment in fragments)

    @cached_property
    def lines(self) -> List[str]:
        return self.text.split('\n')

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @cached_property
    def method_count(self) -> int:
        return len(METHOD_DECLARATION.findall(self.text))

    @cached_property
    def documented_method_count(self) -> int:
        return len(DOCUMENTED_METHOD.findall(self.text))

    @property
    def has_class_doc(self) -> bool:
        return DOCUMENTED_CLASS.search(self.text) is not None

    @cached_property
    def inline_comment_count(self) -> int:
        return len(INLINE_COMMENT.findall(self.text))

    @cached_property
    def method_lengths(self) -> List[int]:
        """
        Line span of every method with a body, measured from its
        declaration to the next declaration (or end of text).
        """
        starts = [m.start() for m in METHOD_WITH_BODY.finditer(self.text)]
        ends = starts[1:] + [len(self.text)]
        return [
            self.text[start:end].count('\n') + 1
            for start, end in zip(starts, ends)
        ]

    @cached_property
    def _field_modifiers(self) -> List[str]:
        return [m.group(1) for m in FIELD_DECLARATION.finditer(self.text)]

    @property
    def private_field_count(self) -> int:
        return self._field_modifiers.count('private')

    @property
    def public_field_count(self) -> int:
        return self._field_modifiers.count('public')

    @cached_property
    def try_catch_count(self) -> int:
        return len(TRY_CATCH.findall(self.text))

    @cached_property
    def empty_catch_count(self) -> int:
        return len(EMPTY_CATCH.findall(self.text))

    @cached_property
    def camel_case_count(self) -> int:
        return len(CAMEL_CASE.findall(self.text))

    @cached_property
    def snake_case_count(self) -> int:
        return len(SNAKE_CASE.findall(self.text))

    @cached_property
    def duplicated_block_count(self) -> int:
        """
        Number of distinct three-line windows seen more than once.
        Blank windows and windows touching imports are ignored.
        """
        windows = Counter()
        for i in range(len(self.lines) - 3):
            window = '\n'.join(self.lines[i:i + 3])
            if window.strip() and 'import ' not in window:
                windows[window] += 1
        return sum(1 for count in windows.values() if count > 1)

    @cached_property
    def main_method_count(self) -> int:
        return len(MAIN_METHOD.findall(self.text))

    @cached_property
    def nested_for_count(self) -> int:
        return len(NESTED_FOR.findall(self.text))

    @cached_property
    def has_recursion(self) -> bool:
        """True if some method calls itself within its own span."""
        matches = list(METHOD_WITH_BODY.finditer(self.text))
        for i, match in enumerate(matches):
            end = matches[i + 1].start() if i + 1 < len(
                matches) else len(self.text)
            body = self.text[match.end():end]
            if re.search(rf'\b{re.escape(match.group(1))}\s*\(', body):
                return True
        return False

    @property
    def has_null_checks(self) -> bool:
        return 'null' in self.text and self.contains_any(
            '!= null', '== null', 'null)')
