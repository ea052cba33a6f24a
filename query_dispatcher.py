"""
Query Dispatcher

Runs lists of query instances against a database.

Instances are sorted by (type, line) and processed one type at a time.
A type's statistics are generated once for all of its instances, then
every instance is executed in line order with its own writer. Writers
are keyed to the instance's line, so callers can lay the outputs out in
file order whatever the execution order was.
"""

import sys
from typing import Any, Callable, List, Optional, TextIO

from database_module import Database
from query_module import QueryInstance, QueryInstanceList, QueryType
from writer_module import QueryWriter

WriterFactory = Callable[[QueryInstance], QueryWriter]


def _generate_statistics(database: Database, query_type: QueryType,
                         instances: List[QueryInstance], diagnostics: TextIO) -> Optional[Any]:
    """Statistics for a run, or None (after a diagnostic) when preparation failed."""
    try:
        statistics = query_type.generate_statistics(database, instances)
    except MemoryError:
        statistics = None
    if statistics is None:
        print(f"Failed to generate statistics for query type {query_type.type_code} "
              f"({query_type.name}): skipping {len(instances)} queries", file=diagnostics)
    return statistics


def _execute(database: Database, statistics: Any, instance: QueryInstance,
             writer: QueryWriter, diagnostics: TextIO) -> int:
    try:
        result = instance.type.execute(database, statistics, instance, writer)
    finally:
        writer.close()
    if result:
        print(f"Query type {instance.type.type_code} ({instance.type.name}) failed "
              f"on line {instance.line_in_file}", file=diagnostics)
    return result


def dispatch_list(database: Database, instances: QueryInstanceList,
                  writer_factory: WriterFactory, diagnostics: Optional[TextIO] = None) -> int:
    """
    Execute every instance of a list.

    Args:
        database: Read-only database to query
        instances: Instances to run; the list is sorted in place
        writer_factory: Creates the writer for each instance
        diagnostics: Where failures are reported

    Returns:
        Number of instances whose execution failed or was skipped
    """
    if diagnostics is None:
        diagnostics = sys.stderr
    failures = 0
    instances.sort()

    for query_type, run in instances.iter_types():
        statistics = None
        if query_type.generate_statistics is not None:
            statistics = _generate_statistics(database, query_type, run, diagnostics)
            if statistics is None:
                failures += len(run)
                continue

        try:
            for instance in run:
                writer = writer_factory(instance)
                if _execute(database, statistics, instance, writer, diagnostics):
                    failures += 1
        finally:
            if query_type.free_statistics is not None:
                query_type.free_statistics(statistics)

    return failures


def dispatch_single(database: Database, instance: QueryInstance, writer: QueryWriter,
                    diagnostics: Optional[TextIO] = None) -> int:
    """Execute one instance, generating statistics just for it."""
    if diagnostics is None:
        diagnostics = sys.stderr
    query_type = instance.type
    statistics = None
    if query_type.generate_statistics is not None:
        statistics = _generate_statistics(database, query_type, [instance], diagnostics)
        if statistics is None:
            writer.close()
            return 1

    try:
        return _execute(database, statistics, instance, writer, diagnostics)
    finally:
        if query_type.free_statistics is not None:
            query_type.free_statistics(statistics)
