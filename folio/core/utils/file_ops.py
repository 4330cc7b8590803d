import os
from typing import Optional


def resolve_data_path(data_dir: str, name: str) -> str:
    """Return the path of a bundled document, leaving absolute names untouched."""
    if os.path.isabs(name):
        return name
    return os.path.normpath(os.path.join(data_dir, name))


def read_text_file(path: str) -> Optional[str]:
    """Read a UTF-8 text file, or return None when it is missing."""
    if not os.path.isfile(path):
        return None
    with open(path, "r", encoding="utf-8") as f:
        return f.read()
