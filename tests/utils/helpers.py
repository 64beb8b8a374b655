"""
Test Helpers
============

Helper functions for common testing operations.
"""

import tempfile
import shutil
from pathlib import Path
from typing import Any, Union

from bs4 import BeautifulSoup

from braceml.models.schemas import Plain, Tag


def escape_dsl(text: str) -> str:
    """Escape text for use inside a DSL quoted string."""
    return text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


def tree_to_dsl(element: Any) -> str:
    """Write a tree node back out as DSL source."""
    if isinstance(element, Plain):
        return f'"{escape_dsl(element.text)}"'

    parts = [element.name]
    if element.id is not None:
        parts.append(f"#{element.id}")
    for class_name in element.classes or ():
        parts.append(f".{class_name}")
    if element.attributes is not None:
        pairs = " ".join(f'{a.name}="{escape_dsl(a.value)}"' for a in element.attributes)
        parts.append(f" [{pairs}]")
    children = " ".join(tree_to_dsl(child) for child in element.content)
    return "".join(parts) + " { " + children + " }"


def document_to_dsl(root: Tag, doctype: str = "html") -> str:
    return f'!doctype {{ "{escape_dsl(doctype)}" }}\n{tree_to_dsl(root)}\n'


def nesting_depth(root: Tag) -> int:
    """Depth of the deepest element below ``root``, counting ``root`` as 1."""
    deepest = 0
    pending = [(root, 1)]
    while pending:
        element, depth = pending.pop()
        deepest = max(deepest, depth)
        pending.extend((child, depth + 1) for child in element.content if isinstance(child, Tag))
    return deepest


def parse_html(html: str) -> BeautifulSoup:
    """Parse generated HTML for structural comparison."""
    return BeautifulSoup(html, "html.parser", multi_valued_attributes=None)


def create_temp_file(content: str, suffix: str = ".tmp") -> Path:
    """Create a temporary file with content."""
    temp_file = tempfile.NamedTemporaryFile(mode="w", suffix=suffix, delete=False, encoding="utf-8")
    temp_file.write(content)
    temp_file.flush()
    temp_file.close()
    return Path(temp_file.name)


def cleanup_temp_path(path: Union[str, Path]) -> None:
    """Clean up temporary file or directory."""
    path = Path(path)
    try:
        if path.is_file():
            path.unlink()
        elif path.is_dir():
            shutil.rmtree(path)
    except (FileNotFoundError, PermissionError):
        pass
