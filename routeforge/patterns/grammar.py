"""
Grammar for RouteForge patterns.

Grammar Specification
=====================

<pattern>   ::= <part>*
<part>      ::= <literal> | <param> | <optional>
<literal>   ::= any run of characters that is not a <param> or a group delimiter
<param>     ::= "<" <name> ">"
<optional>  ::= "(" <part>* ")"
<name>      ::= [A-Za-z_][A-Za-z0-9_-]*

A ``<...>`` that does not hold a well-formed name is literal text.
Optional groups nest to any depth; every ``(`` must be closed.

Every route carries an implicit query-string suffix::

    (?<query_string>)

whose value pattern is ``.*``, so any concrete path may end in ``?...``.

Pattern Examples
================
/users/<id>                        # One parameter
/archive(/<year>(/<month>))        # Nested optional groups
/files/<name>.<ext>                # Literal text between parameters
/search(/page<page>)               # Literal prefix inside a group
"""

import re

# Delimiters
PARAM_OPENED_CHARS = "<"
PARAM_CLOSED_CHARS = ">"
GROUP_OPENED_CHAR = "("
GROUP_CLOSED_CHAR = ")"

PARAM_NAME_SOURCE = r"[A-Za-z_][A-Za-z0-9_\-]*"

# Value pattern for parameters without a condition
PARAM_VALUE_SOURCE = r"[A-Za-z0-9_\-]+"

# Splits a literal buffer into placeholders and plain runs
PARSE_PARAMS_RE = re.compile(
    re.escape(PARAM_OPENED_CHARS)
    + f"({PARAM_NAME_SOURCE})"
    + re.escape(PARAM_CLOSED_CHARS)
    + "|[^" + re.escape(PARAM_OPENED_CHARS + PARAM_CLOSED_CHARS) + "]+"
    + "|" + re.escape(PARAM_OPENED_CHARS)
    + "|" + re.escape(PARAM_CLOSED_CHARS)
)

HTTP_METHODS = ("GET", "POST", "DELETE", "PUT")

# Implicit query-string suffix
QUERY_STRING_PARAM = "query_string"
QUERY_STRING_VALUE_SOURCE = ".*"
QUERY_STRING_SUFFIX = (
    GROUP_OPENED_CHAR
    + "?"
    + PARAM_OPENED_CHARS + QUERY_STRING_PARAM + PARAM_CLOSED_CHARS
    + GROUP_CLOSED_CHAR
)
