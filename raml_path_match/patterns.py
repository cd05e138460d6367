"""Regex patterns for template parsing and parameter capture."""

import re

# Characters with a special meaning inside a regular expression
escape_chars = r"[.*+?=^!:${}()|\[\]/\\]"
escape_expr = re.compile(f"({escape_chars})")

# Template scanning expression: a parameter reference or a literal to escape
template_expr = re.compile(
    r"(?P<prefix>[./])?\{(?P<expand>\+)?(?P<name>(?:\w|%[0-9a-fA-F]{2})+)\}"
    f"|(?P<escape>{escape_chars})"
)

# A "%" that does not start a complete percent-escape
malformed_escape = re.compile(r"%(?![0-9a-fA-F]{2})")

# Capture fragments per parameter type
number_capture = r"[-+]?\d+(?:\.\d+)?"
integer_capture = r"[-+]?\d+"
boolean_capture = r"(?:true|false)"
date_capture = (
    r"(?:Mon|Tue|Wed|Thu|Fri|Sat|Sun), \d{2} "
    r"(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec) \d{4} "
    r"(?:[0-1]\d|2[0-3]):[0-5]\d:[0-5]\d GMT"
)
expand_capture = r".+?"

# Trailing slash allowed only at the very end of the path
trailing_slash = r"(?:\/(?=\Z))?"
segment_boundary = r"(?=\/|\Z)"
