from __future__ import annotations


def split_lines(text: str) -> list[str]:
    """Split on line terminators without producing a phantom trailing line.

    ``\\n`` and ``\\r\\n`` both end a line; a terminator at the very end of
    ``text`` does not start a new, empty one.
    """
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]
