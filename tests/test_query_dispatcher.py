"""
Tests for dispatching instance lists.
"""

import io
import random
import unittest
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from database_module import Database
from queries_module import query_type_list_create
from query_dispatcher import dispatch_list, dispatch_single
from query_module import QueryType, QueryTypeList, QueryInstance, QueryInstanceList
from query_parser import query_parse
from writer_module import QueryWriter
from dataset_helpers import make_user, make_flight, make_reservation


def parse_any(args):
    return tuple(args)


class RecordingTypes:
    """Fake query types that record the order of callbacks."""

    def __init__(self):
        self.calls = []
        self.fail_lines = set()
        self.statistics_result = "stats"

        def generate(database, instances):
            self.calls.append(("generate", [instance.line_in_file for instance in instances]))
            if self.statistics_result is MemoryError:
                raise MemoryError()
            return self.statistics_result

        def free(statistics):
            self.calls.append(("free", statistics))

        def execute(database, statistics, instance, writer):
            self.calls.append(("execute", instance.type.type_code, instance.line_in_file,
                               statistics))
            writer.write_new_object()
            writer.write_new_field("line", "%d", instance.line_in_file)
            return 1 if instance.line_in_file in self.fail_lines else 0

        self.registry = QueryTypeList([
            QueryType("plain", parse_any, execute),
            QueryType("batched", parse_any, execute,
                      generate_statistics=generate, free_statistics=free),
        ])


class TestDispatchList(unittest.TestCase):
    """Test grouping, ordering and failure handling."""

    def setUp(self):
        self.types = RecordingTypes()
        self.writers = {}
        self.diagnostics = io.StringIO()

    def writer_for(self, instance):
        writer = QueryWriter(None, instance.formatted)
        self.writers[instance.line_in_file] = writer
        return writer

    def make_list(self, specs):
        instances = QueryInstanceList()
        for type_number, line in specs:
            instances.add(QueryInstance(self.types.registry.get_by_index(type_number), False,
                                        line, ()))
        return instances

    def test_grouped_and_sorted(self):
        """Each type runs once, its instances in line order."""
        instances = self.make_list([(2, 5), (1, 4), (2, 1), (1, 2), (2, 3)])

        failures = dispatch_list(Database(), instances, self.writer_for, self.diagnostics)

        self.assertEqual(failures, 0)
        self.assertEqual(self.types.calls, [
            ("execute", 1, 2, None),
            ("execute", 1, 4, None),
            ("generate", [1, 3, 5]),
            ("execute", 2, 1, "stats"),
            ("execute", 2, 3, "stats"),
            ("execute", 2, 5, "stats"),
            ("free", "stats"),
        ])
        self.assertEqual(sorted(self.writers), [1, 2, 3, 4, 5])
        self.assertEqual(self.writers[3].get_lines(), ["3"])

    def test_execute_failure_continues(self):
        self.types.fail_lines = {3}
        instances = self.make_list([(2, 1), (2, 3), (2, 5)])

        failures = dispatch_list(Database(), instances, self.writer_for, self.diagnostics)

        self.assertEqual(failures, 1)
        self.assertIn(("execute", 2, 5, "stats"), self.types.calls)
        self.assertEqual(len(self.diagnostics.getvalue().splitlines()), 1)
        self.assertIn("line 3", self.diagnostics.getvalue())

    def test_statistics_failure_skips_run(self):
        """A run without statistics is skipped; other types still run."""
        for result in (None, MemoryError):
            self.types.calls = []
            self.types.statistics_result = result
            instances = self.make_list([(2, 1), (1, 2), (2, 3)])

            failures = dispatch_list(Database(), instances, self.writer_for, io.StringIO())

            self.assertEqual(failures, 2)
            self.assertEqual(self.types.calls, [("execute", 1, 2, None), ("generate", [1, 3])])

    def test_dispatch_single(self):
        instance = QueryInstance(self.types.registry.get_by_index(2), False, 9, ())
        writer = QueryWriter()

        self.assertEqual(dispatch_single(Database(), instance, writer, self.diagnostics), 0)
        self.assertEqual(self.types.calls[0], ("generate", [9]))
        self.assertEqual(self.types.calls[-1], ("free", "stats"))
        self.assertEqual(writer.get_lines(), ["9"])


class TestDispatchOrderInsensitive(unittest.TestCase):
    """Any permutation of the input gives the same per-line output."""

    def setUp(self):
        self.database = Database()
        for user_id, name in (("u1", "Ana"), ("u2", "Anabela"), ("u3", "Bob")):
            self.database.add_user(make_user(user_id, name))
        self.database.add_flight(make_flight(1, "LIS", "OPO", "2022/01/15 10:00:00",
                                             "2022/01/15 11:00:00", "2022/01/15 10:10:00"),
                                 ["u1", "u2"])
        self.database.add_flight(make_flight(2, "OPO", "LIS", "2023/06/01 10:00:00",
                                             "2023/06/01 11:00:00"), ["u1"])
        self.database.add_reservation(make_reservation(1, "u1", rating=4))
        self.database.add_reservation(make_reservation(2, "u3", rating=2))
        self.query_types = query_type_list_create()
        self.lines = [
            "9 An", "3 HTL1001", "1 u1", "7 5", "6F 2022 2", "4 HTL1001", "9 B",
            "8 HTL1001 2022/01/01 2022/12/31", '5 LIS "2021/01/01 00:00:00" "2024/01/01 00:00:00"',
            "2 u1", "10", "10 2022", "3 HTL1001", "1 Book0000000002",
        ]

    def run_lines(self, order):
        instances = QueryInstanceList()
        for index in order:
            instances.add(query_parse(self.lines[index], self.query_types, index + 1))

        writers = {}

        def writer_for(instance):
            writers[instance.line_in_file] = QueryWriter(None, instance.formatted)
            return writers[instance.line_in_file]

        dispatch_list(self.database, instances, writer_for, io.StringIO())
        return {line: writer.get_lines() for line, writer in writers.items()}

    def test_permutations(self):
        expected = self.run_lines(range(len(self.lines)))
        self.assertEqual(len(expected), len(self.lines))

        shuffler = random.Random(1234)
        for _ in range(5):
            order = list(range(len(self.lines)))
            shuffler.shuffle(order)
            self.assertEqual(self.run_lines(order), expected)


if __name__ == '__main__':
    unittest.main()
