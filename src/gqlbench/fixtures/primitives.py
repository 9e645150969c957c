"""Seeded building blocks for synthetic TypeScript/GraphQL projects.

``FixtureSource`` owns the PRNG and the running ``WorkloadStats``. Every
random decision a workload makes goes through ``choose``, ``chance`` or
``randint`` on the same ``random.Random`` instance, so the order of calls
fully determines the generated tree.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from pathlib import Path

from gqlbench.config import DEFAULT_SEED
from gqlbench.domain.models import WorkloadStats
from gqlbench.errors import WorkloadError

logger = logging.getLogger(__name__)

GQL_TAG = "gql`"
GRAPHQL_SENTINEL = "/* GraphQL */`"

FRAGMENTS = (
    """fragment UserBasicInfo on User {
  id
  username
  email
  avatar
}""",
    """fragment PostSummary on Post {
  id
  title
  excerpt
  createdAt
  author {
    username
    avatar
  }
}""",
    """fragment CommentDetails on Comment {
  id
  content
  createdAt
  author {
    id
    username
  }
}""",
)

_QUERY_FIELDS = (
    ("id", "username", "email"),
    (
        "id",
        "username",
        "email",
        "fullName",
        "bio",
        "createdAt",
        "settings { theme language }",
    ),
    (
        "id",
        "username",
        "email",
        "fullName",
        "bio",
        "avatar",
        "createdAt",
        "updatedAt",
        "settings { theme language emailNotifications pushNotifications privacy }",
        "stats { postCount followerCount followingCount likeCount }",
        "posts(first: 10) { edges { node { id title excerpt } } }",
    ),
)

_DEEP_QUERY = """query %(name)sDeepQuery(
    $userId: ID!
    $first: Int = 50
    $after: String
    $includeStats: Boolean = true
    $includeRelations: Boolean = true
    $hideTrending: Boolean = false
  ) {
    user(id: $userId) {
      ...UserBasicInfo
      fullName
      bio
      createdAt
      updatedAt
      settings {
        theme
        language
        privacy
      }
      stats @include(if: $includeStats) {
        postCount
        followerCount
        followingCount
        likeCount
      }
      posts(first: $first, after: $after) {
        edges {
          node {
            ...PostSummary
            content
            tags
            likes
            author {
              ...UserBasicInfo
              posts(first: 5) {
                edges {
                  node {
                    id
                    title
                  }
                }
              }
            }
            comments(first: 10) {
              edges {
                node {
                  id
                  content
                  author {
                    username
                    followers(first: 3) @include(if: $includeRelations) {
                      edges {
                        node {
                          username
                        }
                      }
                    }
                  }
                  replies(first: 5) {
                    edges {
                      node {
                        id
                        content
                      }
                    }
                  }
                }
              }
              pageInfo {
                hasNextPage
                endCursor
              }
              totalCount
            }
          }
          cursor
        }
        pageInfo {
          hasNextPage
          hasPreviousPage
          startCursor
          endCursor
        }
        totalCount
      }
      followers(first: 20) @include(if: $includeRelations) {
        edges {
          node {
            ...UserBasicInfo
            stats {
              followerCount
            }
          }
        }
        totalCount
      }
    }
    trending(limit: 10) @skip(if: $hideTrending) {
      ... on Post {
        id
        title
        likes
      }
      ... on User {
        id
        username
      }
    }
    search(query: "%(name)s", type: ALL) {
      edges {
        node {
          ... on User {
            id
            username
            fullName
          }
          ... on Post {
            id
            title
            excerpt
          }
          ... on Comment {
            id
            content
          }
        }
      }
      totalCount
    }
  }"""

_MUTATIONS = (
    """mutation %(name)s($input: CreateUserInput!) {
  createUser(input: $input) {
    user {
      id
      username
      email
    }
    errors {
      field
      message
    }
  }
}""",
    """mutation %(name)s($id: ID!, $input: UpdateUserInput!) {
  updateUser(id: $id, input: $input) {
    user {
      id
      username
      fullName
    }
    errors {
      message
    }
  }
}""",
    """mutation %(name)s($postId: ID!) {
  likePost(postId: $postId) {
    id
    likes
  }
}""",
)

_SUBSCRIPTION = """subscription %(name)sSubscription($userId: ID) {
    postAdded(authorId: $userId) {
      id
      title
      author {
        username
      }
      createdAt
    }
    notificationReceived {
      id
      type
      message
      read
      relatedUser {
        username
      }
      relatedPost {
        title
      }
    }
  }"""

_SIMPLE_COMPONENT = """
interface %(name)sProps {
  id: string;
  className?: string;
}

export const %(name)s: React.FC<%(name)sProps> = ({ id, className }) => {
  return (
    <div className={className}>
      <h2>%(name)s Component</h2>
      <p>Component ID: {id}</p>
    </div>
  );
};"""

_SIMPLE_SERVICE = """import { gql } from '@apollo/client';

const GET_DATA = gql`
  %(query)s
`;

const UPDATE_DATA = gql`
  %(mutation)s
`;

export class %(name)sService {
  async fetchData(id: string) {
    return { id };
  }

  async updateData(id: string, data: any) {
    return { success: true };
  }
}

export default new %(name)sService();"""


def count_tags(text: str) -> int:
    """Count embedded GraphQL literals: ``gql`` tags plus ``/* GraphQL */`` sentinels."""
    return text.count(GQL_TAG) + text.count(GRAPHQL_SENTINEL)


def count_lines(text: str) -> int:
    """Newline count plus one; a file without a trailing newline still has a line."""
    return text.count("\n") + 1


def title(word: str) -> str:
    return word[:1].upper() + word[1:]


class FixtureSource:
    """Seeded PRNG plus the file writer that keeps ``WorkloadStats`` current."""

    def __init__(self, seed: int = DEFAULT_SEED) -> None:
        self.rng = random.Random(seed)
        self._stats = WorkloadStats()

    @property
    def stats(self) -> WorkloadStats:
        return self._stats

    # -- Randomness ---------------------------------------------------------

    def choose(self, options: Sequence[str]) -> str:
        return self.rng.choice(options)

    def chance(self, p: float) -> bool:
        return self.rng.random() < p

    def randint(self, n: int) -> int:
        """Uniform integer in ``[0, n)``."""
        return self.rng.randrange(n)

    # -- GraphQL operations -------------------------------------------------

    def fragment(self) -> str:
        return self.choose(FRAGMENTS)

    def query(self, name: str, complexity: int) -> str:
        fields = _QUERY_FIELDS[min(max(complexity, 0), len(_QUERY_FIELDS) - 1)]
        body = "\n    ".join(fields)
        return f"query {name}($id: ID!) {{\n  user(id: $id) {{\n    {body}\n  }}\n}}"

    def deep_query(self, name: str, complexity: int) -> str:
        if complexity < len(_QUERY_FIELDS):
            return self.query(name, complexity)
        return _DEEP_QUERY % {"name": name}

    def mutation(self, name: str) -> str:
        return self.choose(_MUTATIONS) % {"name": name}

    def subscription(self, name: str) -> str:
        return _SUBSCRIPTION % {"name": name}

    # -- TypeScript files ---------------------------------------------------

    def util_file(self, name: str, is_complex: bool) -> str:
        content: list[str] = []
        if is_complex:
            content += [
                f"const {name}Fragment = {GRAPHQL_SENTINEL}\n  {self.fragment()}\n`;",
                "",
            ]
        content += [
            f"export function format{name}(data: any): string {{\n"
            "  return JSON.stringify(data);\n"
            "}",
            "",
            f"export function validate{name}(input: any): boolean {{\n"
            "  return input != null;\n"
            "}",
        ]
        return "\n".join(content)

    def component(self, name: str, has_query: bool, has_mutation: bool) -> str:
        parts = ["import React from 'react';"]
        if has_query or has_mutation:
            parts.append("import { gql } from '@apollo/client';")
        if has_query:
            query_name = f"Get{name}Query"
            query = self.query(query_name, self.randint(3))
            parts.append(f"\nconst {query_name} = {GQL_TAG}\n  {query}\n`;")
        if has_mutation:
            mutation_name = f"Update{name}Mutation"
            parts.append(f"\nconst {mutation_name} = {GQL_TAG}\n  {self.mutation(mutation_name)}\n`;")
        parts.append(_SIMPLE_COMPONENT % {"name": name})
        return "\n".join(parts)

    def service_file(self, name: str) -> str:
        return _SIMPLE_SERVICE % {
            "name": name,
            "query": self.query("GetData", 1),
            "mutation": self.mutation("UpdateData"),
        }

    def index_file(self, exports: Sequence[str]) -> str:
        return "\n".join(f"export * from './{name}';" for name in exports)

    # -- Filesystem ---------------------------------------------------------

    def write_file(self, path: Path, content: str) -> None:
        """Write *content* to *path*, creating parents, and update the stats."""
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise WorkloadError(f"failed to write {path}: {exc}") from exc
        self._stats = self._stats.added(count_tags(content), count_lines(content))
        logger.debug("wrote %s", path)
