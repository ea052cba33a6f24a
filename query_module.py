"""
Query Module

Query types, parsed query instances and lists of instances.

A query type is a plain record of callbacks, not a class hierarchy:

    parse_arguments(args)                        -> argument data | None
    clone_arguments(argument_data)               -> copy | None
    free_arguments(argument_data)                -> None
    generate_statistics(database, instances)     -> statistics | None   (optional)
    free_statistics(statistics)                  -> None                 (optional)
    execute(database, statistics, instance, writer) -> 0 | non-zero
    unparse_arguments(argument_data)             -> list of strings      (optional)

Types are registered in a QueryTypeList, where the position of a type
(starting at 1) is the number naming it in query text.
"""

from dataclasses import dataclass, replace
from typing import Any, Callable, Iterator, List, Optional, Tuple


@dataclass(eq=False)
class QueryType:
    """Callbacks implementing one kind of query."""
    name: str
    parse_arguments: Callable[[List[str]], Optional[Any]]
    execute: Callable[..., int]
    clone_arguments: Optional[Callable[[Any], Optional[Any]]] = None
    free_arguments: Optional[Callable[[Any], None]] = None
    generate_statistics: Optional[Callable[..., Optional[Any]]] = None
    free_statistics: Optional[Callable[[Any], None]] = None
    unparse_arguments: Optional[Callable[[Any], List[str]]] = None
    type_code: int = 0

    def __post_init__(self):
        # Argument data is immutable unless a type says otherwise
        if self.clone_arguments is None:
            self.clone_arguments = lambda data: data
        if self.free_arguments is None:
            self.free_arguments = lambda data: None


class QueryTypeList:
    """Ordered registry of query types; type numbers start at 1."""

    def __init__(self, query_types: List[QueryType]):
        self.types: List[QueryType] = []
        for query_type in query_types:
            self.types.append(replace(query_type, type_code=len(self.types) + 1))

    def get_by_index(self, index: int) -> Optional[QueryType]:
        """Look up a type by its number, or None if there is no such type."""
        if index < 1 or index > len(self.types):
            return None
        return self.types[index - 1]

    def __len__(self) -> int:
        return len(self.types)

    def __iter__(self) -> Iterator[QueryType]:
        return iter(self.types)


@dataclass
class QueryInstance:
    """One parsed query."""
    type: QueryType
    formatted: bool = False
    line_in_file: int = 1
    argument_data: Any = None


def query_instance_clone(instance: QueryInstance) -> Optional[QueryInstance]:
    """Deep-copy an instance, or None if its arguments could not be cloned."""
    data = instance.type.clone_arguments(instance.argument_data)
    if data is None and instance.argument_data is not None:
        return None
    return QueryInstance(instance.type, instance.formatted, instance.line_in_file, data)


def query_instance_free(instance: QueryInstance):
    instance.type.free_arguments(instance.argument_data)
    instance.argument_data = None


class QueryInstanceList:
    """Instances waiting to be dispatched."""

    def __init__(self):
        self.instances: List[QueryInstance] = []

    def add(self, instance: QueryInstance):
        """Add a copy of an instance to the list."""
        clone = query_instance_clone(instance)
        if clone is None:
            raise MemoryError("Failed to clone query arguments")
        self.instances.append(clone)

    def sort(self):
        """Order instances by (type number, line in file)."""
        self.instances.sort(key=lambda instance: (instance.type.type_code, instance.line_in_file))

    def iter_types(self) -> Iterator[Tuple[QueryType, List[QueryInstance]]]:
        """
        Yield maximal runs of consecutive instances of the same type.

        Sort the list first to get exactly one run per type.
        """
        run: List[QueryInstance] = []
        for instance in self.instances:
            if run and run[0].type is not instance.type:
                yield run[0].type, run
                run = []
            run.append(instance)
        if run:
            yield run[0].type, run

    def free(self):
        for instance in self.instances:
            query_instance_free(instance)
        self.instances = []

    def __iter__(self) -> Iterator[QueryInstance]:
        return iter(self.instances)

    def __len__(self) -> int:
        return len(self.instances)
