#!/usr/bin/env python3
"""
Airline Query Engine

Loads an airline dataset and answers queries over it.

Usage:
    airline_query.py DATASET_DIR QUERY_FILE    batch mode
    airline_query.py                           interactive mode

Batch mode writes the answer to query line N to
Resultados/commandN_output.txt, and the rejected dataset lines to
Resultados/<file>_errors.csv.
"""

import os
import sys
from typing import List, Optional, TextIO

from database_module import Database
from loader_module import dataset_load, DATASET_FILES, RESULTS_DIRECTORY
from queries_module import query_type_list_create
from query_dispatcher import dispatch_list, dispatch_single
from query_module import QueryInstance
from query_parser import query_file_parse, query_parse
from writer_module import QueryWriter

# Constants
PROMPT = "> "
QUIT_COMMANDS = ("quit", "exit")


def load_database(dataset_dir: str, errors_dir: Optional[str],
                  out: Optional[TextIO] = None) -> Optional[Database]:
    """Load a dataset, printing a summary; None if the files can't be read."""
    if out is None:
        out = sys.stdout
    database = Database()
    try:
        stats = dataset_load(database, dataset_dir, errors_dir)
    except OSError as e:
        print(f"Failed to load dataset files! ({e})", file=sys.stderr)
        return None

    for name in DATASET_FILES:
        print(f"✓ {name}: {stats[name].accepted} loaded, {stats[name].rejected} rejected",
              file=out)
    return database


def batch_mode(dataset_dir: str, query_file: str,
               results_dir: str = RESULTS_DIRECTORY) -> int:
    """
    Run every query of a file and write each answer to its own file.

    Returns:
        Process exit status
    """
    try:
        os.makedirs(results_dir, exist_ok=True)
    except OSError as e:
        print(f"Failed to create results directory: {e}", file=sys.stderr)
        return 1

    database = load_database(dataset_dir, results_dir, sys.stderr)
    if database is None:
        return 1

    query_types = query_type_list_create()
    try:
        with open(query_file, 'r', encoding='utf-8') as stream:
            instances = query_file_parse(stream, query_types)
    except OSError as e:
        print(f"Failed to open query file: {e}", file=sys.stderr)
        database.free()
        return 1

    def writer_for(instance: QueryInstance) -> QueryWriter:
        path = os.path.join(results_dir, f"command{instance.line_in_file}_output.txt")
        return QueryWriter(path, instance.formatted)

    try:
        dispatch_list(database, instances, writer_for)
    except OSError as e:
        print(f"Failed to write query output: {e}", file=sys.stderr)
        return 1
    finally:
        instances.free()
        database.free()
    return 0


def interactive_mode(stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> int:
    """
    Line-oriented session: ask for a dataset, then answer queries until EOF.

    Returns:
        Process exit status
    """
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout

    print("Airline Query Engine", file=stdout)
    print("=" * 60, file=stdout)
    print("Dataset directory: ", end='', file=stdout, flush=True)
    dataset_dir = stdin.readline().strip()
    if not dataset_dir:
        print("No dataset given", file=sys.stderr)
        return 1

    database = load_database(dataset_dir, None, stdout)
    if database is None:
        return 1

    query_types = query_type_list_create()
    scratch: List[str] = []
    line_number = 0
    while True:
        print(PROMPT, end='', file=stdout, flush=True)
        line = stdin.readline()
        if not line:
            break
        text = line.strip()
        if not text:
            continue
        if text.lower() in QUIT_COMMANDS:
            break

        line_number += 1
        instance = query_parse(text, query_types, line_number, scratch)
        if instance is None:
            print(f"failed to parse query: `{text}`", file=stdout)
            continue

        writer = QueryWriter(None, instance.formatted)
        dispatch_single(database, instance, writer, stdout)
        lines = writer.get_lines()
        if lines:
            print('\n'.join(lines), file=stdout)
        else:
            print("(no results)", file=stdout)

    database.free()
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main function"""
    args = sys.argv[1:] if argv is None else argv
    if not args:
        return interactive_mode()
    if len(args) == 2:
        return batch_mode(args[0], args[1])

    print("Usage:", file=sys.stderr)
    print("  airline_query.py DATASET_DIR QUERY_FILE    (batch mode)", file=sys.stderr)
    print("  airline_query.py                           (interactive mode)", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())
