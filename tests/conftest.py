"""Shared test fixtures for gqlslice tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from gqlslice.schema.loader import build_schema_index
from gqlslice.schema.types import SchemaIndex

# A small Hasura-style schema: snake_case tables, conventional
# *_bool_exp / *_order_by / *_select_column inputs, and custom scalars.
JOB_SCHEMA_SDL = '''
schema {
  query: query_root
  mutation: mutation_root
}

scalar uuid
scalar json
scalar timestamptz

enum order_by {
  asc
  desc
}

enum job_status_enum {
  PENDING
  DONE
}

input uuid_comparison_exp {
  _eq: uuid
  _in: [uuid!]
}

input job_job_bool_exp {
  _and: [job_job_bool_exp!]
  _not: job_job_bool_exp
  _or: [job_job_bool_exp!]
  id: uuid_comparison_exp
  company_id: uuid_comparison_exp
}

input job_job_order_by {
  id: order_by
  created_at: order_by
}

input job_parameter_bool_exp {
  _and: [job_parameter_bool_exp!]
  id: uuid_comparison_exp
}

enum job_parameter_select_column {
  id
  key
}

input job_job_insert_input {
  class: String
  company_id: uuid
}

interface node {
  id: ID!
}

type job_job {
  id: uuid!
  company_id: uuid!
  class: String!
  status: job_status_enum!
  output: json
  created_at: timestamptz!
  company: company_company!
  parameters(where: job_parameter_bool_exp, distinct_on: [job_parameter_select_column!], limit: Int): [job_parameter!]!
}

type job_parameter {
  id: uuid!
  key: String!
  value: String
  job: job_job!
}

type company_company {
  id: uuid!
  name: String!
  jobs(where: job_job_bool_exp, order_by: [job_job_order_by!]): [job_job!]!
  address: company_address
}

type company_address {
  id: uuid!
  city: String
}

union search_result = job_job | company_company

type query_root {
  job_job(where: job_job_bool_exp, limit: Int, offset: Int, order_by: [job_job_order_by!]): [job_job!]!
  """fetch a job by primary key"""
  job_job_by_pk(id: uuid!): job_job
  company_company: [company_company!]!
  node(id: ID!): node
  search(term: String!): [search_result!]!
}

type mutation_root {
  insert_job_job_one(object: job_job_insert_input!): job_job
}
'''


@pytest.fixture
def job_schema() -> SchemaIndex:
    return build_schema_index(JOB_SCHEMA_SDL)


@pytest.fixture
def schema_file(tmp_path: Path) -> Path:
    path = tmp_path / "schema.graphql"
    path.write_text(JOB_SCHEMA_SDL)
    return path


def header_count(fragments: list[str], keyword: str, name: str) -> int:
    """How many fragments declare *name* with *keyword* (type, input, enum...)."""
    declaration = f"{keyword} {name}"
    return sum(
        1
        for fragment in fragments
        if fragment == declaration or fragment.startswith(f"{declaration} ")
    )


def declared_names(fragments: list[str]) -> list[str]:
    """Declared type name of every fragment, in output order."""
    return [fragment.split("\n", 1)[0].split(" ")[1] for fragment in fragments]
