"""Tests for the line-oriented selection parser."""

from __future__ import annotations

from gqlslice.selection.parser import (
    flatten_selection_text,
    parse_selection,
    parse_selection_document,
)
from gqlslice.selection.types import ObjectRegistry, SelectionNode

JOB_HEADER = [
    "job_job(",
    "where: $where",
    "limit: $limit",
    "offset: $offset",
    "order_by: $order_by",
    ") {",
]

JOB_FIELDS = [
    "id",
    "company_id",
    "class",
    "is_cacheable",
    "input_hash",
    "output_file_url",
    "output_expires_at",
    "status",
]

PARAMETER_BLOCK = [
    "parameters {",
    "id",
    "key",
    "value",
    "created_at",
    "created_by",
    "updated_at",
    "updated_by",
]

TRAILING_FIELDS = [
    "error_message",
    "created_at1",
    "created_by1",
    "updated_at1",
    "updated_by1",
]


class TestParseSelection:
    def test_header_with_argument_lines(self):
        lines = JOB_HEADER + JOB_FIELDS + ["}"]
        node, count = parse_selection(lines, ObjectRegistry())
        assert node.name == "job_job"
        assert count == 14
        assert len(node.fields) == 8
        assert node.children == []

    def test_nested_block(self):
        lines = JOB_HEADER + JOB_FIELDS + PARAMETER_BLOCK + ["}"] + TRAILING_FIELDS + ["}"]
        node, count = parse_selection(lines, ObjectRegistry())
        assert node.name == "job_job"
        assert count == 28
        assert len(node.fields) == 14
        assert node.fields["parameters"] is True
        assert node.fields["status"] is False
        assert len(node.children) == 1
        assert node.children[0].name == "parameters"
        assert len(node.children[0].fields) == 7

    def test_missing_closers(self):
        lines = JOB_HEADER + JOB_FIELDS + PARAMETER_BLOCK
        node, count = parse_selection(lines, ObjectRegistry())
        assert node.name == "job_job"
        assert count == 23
        assert len(node.fields) == 9
        assert len(node.children) == 1
        assert len(node.children[0].fields) == 7

    def test_missing_parent_closer(self):
        lines = JOB_HEADER + JOB_FIELDS + PARAMETER_BLOCK + ["}"]
        node, count = parse_selection(lines, ObjectRegistry())
        assert count == 23
        assert len(node.fields) == 9
        assert len(node.children[0].fields) == 7

    def test_single_line_header_with_alias(self):
        fields = [f"field_{n}" for n in range(12)]
        lines = ["job: job_job_by_pk(id: $id) {"] + fields + ["}"]
        node, count = parse_selection(lines, ObjectRegistry())
        assert node.name == "job_job_by_pk"
        assert count == 13
        assert list(node.fields) == fields

    def test_field_aliases_and_arguments_stripped(self):
        lines = ["job_job {", "total: count", "output(path: $p)", "}"]
        node, _ = parse_selection(lines, ObjectRegistry())
        assert list(node.fields) == ["count", "output"]

    def test_block_without_header(self):
        node, count = parse_selection(["id", "class", "}"], ObjectRegistry())
        assert node.name == ""
        assert list(node.fields) == ["id", "class"]
        assert count == 2

    def test_empty_input(self):
        node, count = parse_selection([], ObjectRegistry())
        assert node.name == ""
        assert node.fields == {}
        assert count == 0

    def test_parse_does_not_register(self):
        registry = ObjectRegistry()
        parse_selection(JOB_HEADER + JOB_FIELDS + ["}"], registry)
        assert len(registry) == 0


class TestObjectRegistry:
    def test_second_parse_merges_into_registered_node(self):
        registry = ObjectRegistry()
        first_fields = JOB_FIELDS[:6]
        second_fields = [f"extra_{n}" for n in range(8)]

        first, _ = parse_selection(["job_job {"] + first_fields + ["}"], registry)
        assert registry.register(first) is first

        second, _ = parse_selection(["job_job {"] + second_fields + ["}"], registry)
        assert second is first
        assert registry.register(second) is first

        assert len(registry) == 1
        assert registry.names() == ["job_job"]
        assert list(first.fields) == first_fields + second_fields

    def test_register_merges_distinct_node(self):
        registry = ObjectRegistry()
        first = SelectionNode(name="job_job")
        first.add_field("id")
        second = SelectionNode(name="job_job")
        second.add_field("class")
        second.add_field("id", is_parent=True)

        registry.register(first)
        assert registry.register(second) is first
        assert first.fields == {"id": True, "class": False}

    def test_registries_are_independent(self):
        first_run = ObjectRegistry()
        second_run = ObjectRegistry()
        lines = ["job_job {", "id", "}"]

        a, _ = parse_selection(lines, first_run)
        first_run.register(a)
        b, _ = parse_selection(lines, second_run)

        assert b is not a
        assert "job_job" in first_run
        assert "job_job" not in second_run

    def test_child_never_added_twice(self):
        parent = SelectionNode(name="company")
        child = SelectionNode(name="jobs")
        parent.add_child(child)
        parent.add_child(child)
        parent.add_child(parent)
        assert parent.children == [child]


class TestParseSelectionDocument:
    def test_sibling_roots(self):
        lines = ["job_job {", "id", "}", "company_company {", "name", "}"]
        registry = ObjectRegistry()
        roots = parse_selection_document(lines, registry)
        assert [root.name for root in roots] == ["job_job", "company_company"]
        assert registry.names() == ["job_job", "company_company"]

    def test_repeated_root_merges(self):
        lines = ["job_job {", "id", "}", "job_job {", "class", "}"]
        registry = ObjectRegistry()
        roots = parse_selection_document(lines, registry)
        assert len(roots) == 1
        assert list(roots[0].fields) == ["id", "class"]

    def test_nested_child_reuses_registered_root(self):
        lines = [
            "company_company {",
            "id",
            "}",
            "job_job {",
            "company_company {",
            "name",
            "}",
            "}",
        ]
        registry = ObjectRegistry()
        roots = parse_selection_document(lines, registry)
        company, job = roots
        assert job.children == [company]
        assert list(company.fields) == ["id", "name"]

    def test_nested_blocks_share_one_node_across_roots(self):
        lines = [
            "job_job {",
            "company {",
            "id",
            "}",
            "}",
            "company_company {",
            "jobs {",
            "company {",
            "name",
            "}",
            "}",
            "}",
        ]
        registry = ObjectRegistry()
        job, company_company = parse_selection_document(lines, registry)
        company = job.children[0]
        assert company_company.children[0].children[0] is company
        assert list(company.fields) == ["id", "name"]
        assert registry.get("company") is company
        assert registry.names() == ["company", "job_job", "jobs", "company_company"]

    def test_same_named_siblings_merge(self):
        lines = ["job_job {", "company {", "id", "}", "company {", "name", "}", "}"]
        registry = ObjectRegistry()
        (job,) = parse_selection_document(lines, registry)
        assert len(job.children) == 1
        assert list(job.children[0].fields) == ["id", "name"]

    def test_empty(self):
        assert parse_selection_document([], ObjectRegistry()) == []


class TestFlattenSelectionText:
    def test_strips_operation_braces(self):
        text = """
            query Jobs {
              job_job {
                id
              }
            }
        """
        assert flatten_selection_text(text) == ["job_job {", "id", "}"]

    def test_multi_line_variables(self):
        text = """
            query Jobs(
              $where: job_job_bool_exp
            ) {
              job_job(where: $where) {
                id
              }
            }
        """
        assert flatten_selection_text(text) == ["job_job(where: $where) {", "id", "}"]

    def test_anonymous_operation(self):
        assert flatten_selection_text("{\n  job_job {\n    id\n  }\n}") == [
            "job_job {",
            "id",
            "}",
        ]

    def test_bare_selection_kept(self):
        assert flatten_selection_text("job_job {\n  id\n}\n") == ["job_job {", "id", "}"]

    def test_round_trip_through_parser(self):
        text = "mutation Create($object: job_job_insert_input!) {\n  insert_job_job_one(object: $object) {\n    id\n  }\n}"
        registry = ObjectRegistry()
        roots = parse_selection_document(flatten_selection_text(text), registry)
        assert [root.name for root in roots] == ["insert_job_job_one"]
        assert list(roots[0].fields) == ["id"]
