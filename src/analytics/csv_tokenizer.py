from __future__ import annotations

from typing import List


def split_lines(text: str) -> List[str]:
    """Split a CSV body into lines. Quoted fields spanning lines are not supported."""
    return text.lstrip("\ufeff").rstrip().splitlines()


def tokenize_line(line: str, delimiter: str = ",", quote: str = '"') -> List[str]:
    """Split one delimited line into trimmed fields.

    Inside quotes the delimiter is literal and a doubled quote stands for one
    quote character. An unterminated quote swallows the rest of the line into
    the current field.
    """
    fields: List[str] = []
    current: List[str] = []
    in_quotes = False
    index = 0
    length = len(line)

    while index < length:
        char = line[index]
        if in_quotes:
            if char == quote:
                if index + 1 < length and line[index + 1] == quote:
                    current.append(quote)
                    index += 1
                else:
                    in_quotes = False
            else:
                current.append(char)
        elif char == quote:
            in_quotes = True
        elif char == delimiter:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        index += 1

    fields.append("".join(current).strip())
    return fields
