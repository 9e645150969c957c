"""Tiny tier: a flat project of 30 components plus query and mutation files."""

from __future__ import annotations

from pathlib import Path

from gqlbench.workloads.base import Workload

COMPONENTS = 30
QUERY_FILES = 10
MUTATION_FILES = 10

_QUERY_FILE = """import { gql } from '@apollo/client';

export const %(name)sQuery = gql`
  query %(name)s($first: Int = 10) {
    users(first: $first) {
      edges {
        node {
          id
          username
          email
          fullName
        }
      }
      pageInfo {
        hasNextPage
        endCursor
      }
    }
  }
`;

export const %(name)sDetailQuery = gql`
  query %(name)sDetail($id: ID!) {
    user(id: $id) {
      id
      username
      email
      fullName
      bio
      avatar
      settings {
        theme
        language
      }
    }
  }
`;"""

_MUTATION_FILE = """import { gql } from '@apollo/client';

export const Create%(name)sMutation = gql`
  mutation Create%(name)s($input: CreatePostInput!) {
    createPost(input: $input) {
      post {
        id
        title
        content
        author {
          username
        }
      }
      errors {
        field
        message
      }
    }
  }
`;

export const Update%(name)sMutation = gql`
  mutation Update%(name)s($id: ID!, $input: UpdatePostInput!) {
    updatePost(id: $id, input: $input) {
      post {
        id
        title
        content
        updatedAt
      }
      errors {
        message
      }
    }
  }
`;"""

_APP = """import React from 'react';
import { gql } from '@apollo/client';
import { Component1, Component2, Component3 } from './components';

const APP_QUERY = gql`
  query AppQuery {
    users(first: 10) {
      edges {
        node {
          id
          username
          email
        }
      }
    }
  }
`;

export const App: React.FC = () => {
  return (
    <div className="app">
      <h1>Benchmark App</h1>
      <Component1 id="1" />
      <Component2 id="2" />
      <Component3 id="3" />
    </div>
  );
};

export default App;"""


class TinyWorkload(Workload):
    """Quick smoke-test sized project."""

    name = "tiny"

    def write_sources(self, src: Path) -> None:
        components_dir = src / "components"
        names = [f"Component{i + 1}" for i in range(COMPONENTS)]

        for i, name in enumerate(names):
            content = self.component(name, has_query=i % 2 == 0, has_mutation=i % 3 == 0)
            self.write_file(components_dir / f"{name}.tsx", content)

        for i in range(QUERY_FILES):
            name = f"query{i + 1}"
            self.write_file(src / "queries" / f"{name}.ts", _QUERY_FILE % {"name": name})

        for i in range(MUTATION_FILES):
            name = f"mutation{i + 1}"
            self.write_file(src / "mutations" / f"{name}.ts", _MUTATION_FILE % {"name": name})

        self.write_file(components_dir / "index.ts", self.index_file(names))
        self.write_file(src / "App.tsx", _APP)
