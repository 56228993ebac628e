from patterncat.parser.markdown import (
    classify_heading,
    parse_entry,
    parse_index,
    scan,
)

__all__ = [
    "classify_heading",
    "parse_entry",
    "parse_index",
    "scan",
]
