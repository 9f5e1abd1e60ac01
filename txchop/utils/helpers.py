import os
from typing import Optional


def save_to_file(output_directory: Optional[str], filename: str, code: str):
    if output_directory is not None:
        target = os.path.join(output_directory, filename)
    else:
        target = filename
    with open(target, "w") as f:
        f.write(code)
    return target


def read_file(filename: str):
    with open(filename, 'r', encoding='utf-8') as f:
        return f.read()


def without_extension(filename: str) -> str:
    ext_idx = filename.rfind('.')
    ext_idx = len(filename) if ext_idx == -1 else ext_idx
    return filename[:ext_idx]
