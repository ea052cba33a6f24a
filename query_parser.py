"""
Query Parser

Turns query text into QueryInstance objects.

Line grammar:

    TYPE[F] [ARG]*
    ARG := BAREWORD | "QUOTED"

The type number may be followed by F to request formatted output.
Arguments are separated by whitespace; a quoted argument keeps the
whitespace inside its quotes. A quote may only open or close a token.
"""

import sys
from typing import List, Optional, TextIO

from query_module import QueryInstance, QueryInstanceList, QueryTypeList
from types_module import parse_uint32

# Constants
QUOTE = '"'
FORMATTED_SUFFIX = 'F'


def query_tokenize(line: str, scratch: Optional[List[str]] = None) -> Optional[List[str]]:
    """
    Split a query line into tokens.

    Args:
        line: Query text
        scratch: List reused to hold the tokens (cleared first); a new list
            is used when omitted

    Returns:
        The token list, or None on an unterminated quote or a quote that
        does not sit at a token boundary
    """
    tokens = scratch if scratch is not None else []
    tokens.clear()

    i = 0
    length = len(line)
    while i < length:
        if line[i].isspace():
            i += 1
            continue

        if line[i] == QUOTE:
            end = line.find(QUOTE, i + 1)
            if end < 0:
                return None
            if end + 1 < length and not line[end + 1].isspace():
                return None
            tokens.append(line[i + 1:end])
            i = end + 1
        else:
            start = i
            while i < length and not line[i].isspace():
                if line[i] == QUOTE:
                    return None
                i += 1
            tokens.append(line[start:i])

    return tokens


def query_parse(line: str, query_type_list: QueryTypeList, line_in_file: int = 1,
                scratch: Optional[List[str]] = None) -> Optional[QueryInstance]:
    """
    Parse one query line.

    Args:
        line: Query text
        query_type_list: Registry used to resolve the type number
        line_in_file: Line number recorded in the instance
        scratch: Token list reused across calls

    Returns:
        The parsed instance, or None if the type is unknown or its
        arguments are rejected
    """
    tokens = query_tokenize(line, scratch)
    if not tokens:
        return None

    type_token = tokens[0]
    formatted = type_token.endswith(FORMATTED_SUFFIX)
    if formatted:
        type_token = type_token[:-1]

    type_number = parse_uint32(type_token)
    if type_number is None:
        return None
    query_type = query_type_list.get_by_index(type_number)
    if query_type is None:
        return None

    argument_data = query_type.parse_arguments(tokens[1:])
    if argument_data is None:
        return None

    return QueryInstance(query_type, formatted, line_in_file, argument_data)


def query_file_parse(stream: TextIO, query_type_list: QueryTypeList,
                     diagnostics: Optional[TextIO] = None) -> QueryInstanceList:
    """
    Parse a query file, one query per line.

    Lines are numbered from 1. Blank lines are skipped; lines that fail to
    parse are reported on diagnostics and left out of the result.
    """
    if diagnostics is None:
        diagnostics = sys.stderr
    instances = QueryInstanceList()
    scratch: List[str] = []

    for line_number, line in enumerate(stream, start=1):
        text = line.rstrip('\r\n')
        if not text.strip():
            continue

        instance = query_parse(text, query_type_list, line_number, scratch)
        if instance is None:
            print(f"failed to parse query: `{text}` (line {line_number})", file=diagnostics)
            continue
        instances.add(instance)

    return instances


def _quote_argument(argument: str) -> str:
    if argument == '' or any(c.isspace() for c in argument) or argument.startswith(QUOTE):
        return QUOTE + argument + QUOTE
    return argument


def query_instance_serialize(instance: QueryInstance) -> str:
    """
    Render an instance back into query text.

    Raises:
        ValueError: If the instance's type cannot render its arguments
    """
    query_type = instance.type
    if query_type.unparse_arguments is None:
        raise ValueError(f"Query type {query_type.name} cannot be serialized")

    head = str(query_type.type_code) + (FORMATTED_SUFFIX if instance.formatted else '')
    arguments = query_type.unparse_arguments(instance.argument_data)
    return ' '.join([head] + [_quote_argument(argument) for argument in arguments])
