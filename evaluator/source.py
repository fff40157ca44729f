import re
from pathlib import Path
from typing import Optional

from .constant import SOURCE_EXTENSION, Language
from .workspace import Workspace

CLASS_NAME_PATTERN = re.compile(r'public\s+class\s+(\w+)')


def extract_class_name(code: str) -> Optional[str]:
    """Return the first public class name, or None if there is none."""
    match = CLASS_NAME_PATTERN.search(code)
    if match is None:
        return None
    return match.group(1)


def source_filename(class_name: str,
                    language: Language = Language.JAVA) -> str:
    return f'{class_name}{SOURCE_EXTENSION[language]}'


def materialize(
    workspace: Workspace,
    code: str,
    class_name: str,
    language: Language = Language.JAVA,
) -> Path:
    path = workspace.file(source_filename(class_name, language))
    path.write_text(code, encoding='utf-8', newline='')
    return path
