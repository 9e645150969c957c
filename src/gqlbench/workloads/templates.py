"""Text templates for the modular (mid and large) workloads.

Every function here is deterministic: random choices are made by the caller
and passed in, so the PRNG call order stays visible in the workload classes.
"""

from __future__ import annotations

from collections.abc import Sequence

from gqlbench.fixtures.primitives import title

CONFIG_TEMPLATE = """schema:
  - path: ./schema.graphql

documents:
  include:
    - "./src/**/*.{ts,tsx}"
  exclude:
%(exclude)s

generates:
  ./src/generated/graphql.ts:
    plugins:
      - typescript
      - typescript-operations
      - typed-document-node

scalars:
  DateTime: string
  JSON: any"""

TEST_EXCLUDE = "./src/**/*.test.{ts,tsx}"
SPEC_EXCLUDE = "./src/**/*.spec.{ts,tsx}"
STORIES_EXCLUDE = "./src/**/*.stories.{ts,tsx}"


def config_file(exclude: Sequence[str]) -> str:
    lines = "\n".join(f'    - "{pattern}"' for pattern in exclude)
    return CONFIG_TEMPLATE % {"exclude": lines}


# ---------------------------------------------------------------------------
# Components
# ---------------------------------------------------------------------------

_COMPONENT_QUERIES = (
    """query %(name)sQuery($id: ID!) {
    user(id: $id) {
      id
      username
      email
    }
  }""",
    """query %(name)sQuery($id: ID!, $first: Int = 10) {
    user(id: $id) {
      ...UserBasicInfo
      fullName
      bio
      posts(first: $first) {
        edges {
          node {
            id
            title
            excerpt
          }
        }
      }
    }
  }""",
    """query %(name)sQuery(
    $id: ID!
    $first: Int = 20
    $after: String
    $includeStats: Boolean = true
  ) {
    user(id: $id) {
      ...UserBasicInfo
      fullName
      bio
      createdAt
      settings {
        theme
        language
        emailNotifications
        pushNotifications
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
            id
            title
            content
            excerpt
            tags
            likes
            createdAt
            comments(first: 5) {
              edges {
                node {
                  id
                  content
                  author {
                    username
                  }
                }
              }
            }
          }
        }
        pageInfo {
          hasNextPage
          endCursor
        }
      }
    }
  }""",
)

COMPONENT_MUTATIONS = (
    """mutation %(name)sCreateUser($input: CreateUserInput!) {
    createUser(input: $input) {
      user {
        id
        username
        email
        fullName
      }
      errors {
        field
        message
      }
    }
  }""",
    """mutation %(name)sUpdatePost($id: ID!, $input: UpdatePostInput!) {
    updatePost(id: $id, input: $input) {
      post {
        id
        title
        content
        updatedAt
        tags
      }
      errors {
        field
        message
      }
    }
  }""",
    """mutation %(name)sComplexAction($userId: ID!, $postId: ID!) {
    followUser(userId: $userId) {
      id
      followers(first: 1) {
        totalCount
      }
    }
    likePost(postId: $postId) {
      id
      likes
    }
  }""",
)

COMPLEX_CREATE_MUTATION = """mutation %(name)sComplexCreate(
    $userInput: CreateUserInput!
    $postInput: CreatePostInput!
    $followUserId: ID!
    $skipFollow: Boolean = false
  ) {
    createUser(input: $userInput) {
      user {
        id
        username
      }
      errors {
        field
        message
      }
    }
    createPost(input: $postInput) {
      post {
        id
        title
        tags
      }
      errors {
        message
      }
    }
    followUser(userId: $followUserId) @skip(if: $skipFollow) {
      id
    }
  }"""

_COMPONENT_BODY = """
interface %(name)sProps {
  id: string;
  className?: string;
  onUpdate?: (data: any) => void;
  variant?: 'primary' | 'secondary' | 'danger';
}

export const %(name)s: React.FC<%(name)sProps> = ({
  id,
  className,
  onUpdate,
  variant = 'primary'
}) => {
  const navigate = useNavigate();
  const { userId } = useParams<{ userId: string }>();
  const [isOpen, setIsOpen] = useState(false);
  const [formData, setFormData] = useState({ name: '', email: '' });
%(hooks)s

  const handleSubmit = useCallback((e: React.FormEvent) => {
    e.preventDefault();%(submit)s
  }, [formData, onUpdate]);

  const computedValue = useMemo(() => {
    return formData.name.length * %(factor)d;
  }, [formData.name]);

  useEffect(() => {
    console.log('%(name)s mounted');
    return () => console.log('%(name)s unmounted');
  }, []);

  return (
    <div className={`component-wrapper ${className} ${variant}`}>
      <header className="component-header">
        <h2>%(name)s</h2>
        <span>Module: %(module)s | Index: %(index)d</span>
      </header>

      <main className="component-body">
        <form onSubmit={handleSubmit}>
          <input
            type="text"
            value={formData.name}
            onChange={(e) => setFormData({ ...formData, name: e.target.value })}
            placeholder="Enter name"
          />
          <input
            type="email"
            value={formData.email}
            onChange={(e) => setFormData({ ...formData, email: e.target.value })}
            placeholder="Enter email"
          />
          <button type="submit">Submit</button>
        </form>

        <div className="computed-value">
          Computed: {computedValue}
        </div>
      </main>

      <footer className="component-footer">
        <button onClick={() => setIsOpen(!isOpen)}>
          Toggle Panel
        </button>
        <button onClick={() => navigate(`/%(module)s/${id}`)}>
          Navigate
        </button>
      </footer>

      {isOpen && (
        <aside className="side-panel">
          <h3>Additional Information</h3>
          <p>Component ID: {id}</p>
          <p>User ID: {userId || 'N/A'}</p>
        </aside>
      )}
    </div>
  );
};

export default %(name)s;"""


def component_query(name: str, complexity: int) -> str:
    return _COMPONENT_QUERIES[complexity] % {"name": name}


def _hook_usage(name: str, has_query: bool, has_mutation: bool, has_subscription: bool) -> str:
    hooks = []
    if has_query:
        hooks.append(
            f"""
  const {{ data, loading, error }} = useQuery({name}_QUERY, {{
    variables: {{ id: id || userId || '1' }},
    skip: !id && !userId,
  }});"""
        )
    if has_mutation:
        hooks.append(
            f"""
  const [mutate, {{ loading: mutating }}] = useMutation({name}_MUTATION, {{
    onCompleted: (data) => {{
      onUpdate?.(data);
    }},
  }});"""
        )
    if has_subscription:
        hooks.append(
            f"""
  const {{ data: liveData }} = useSubscription({name}_SUBSCRIPTION, {{
    variables: {{ userId: userId || id }},
  }});"""
        )
    return "\n".join(hooks)


def _submit_logic(has_mutation: bool) -> str:
    if has_mutation:
        return """
    if (mutate) {
      mutate({ variables: { input: formData } });
    }"""
    return """
    console.log('Submitting:', formData);
    onUpdate?.(formData);"""


def component(
    name: str,
    module: str,
    index: int,
    factor: int,
    *,
    query: str | None = None,
    mutation: str | None = None,
    subscription: str | None = None,
    fragments: Sequence[tuple[str, str]] = (("UserBasicInfo", "fragment1"),),
) -> str:
    """A React component with optional embedded operations.

    *fragments* lists ``(export, module)`` pairs interpolated ahead of the
    query, e.g. ``("UserBasicInfo", "fragment1")``.
    """
    has_ops = query is not None or mutation is not None or subscription is not None
    parts = [
        "import React, { useState, useEffect, useCallback, useMemo } from 'react';",
        "import { useParams, useNavigate } from 'react-router-dom';",
    ]
    if has_ops:
        parts.append(
            "import { gql, useQuery, useMutation, useSubscription } from '@apollo/client';"
        )
        parts += [
            f"import {{ {export} }} from '../../../graphql/fragments/{source}';"
            for export, source in fragments
        ]
    if query is not None:
        spreads = "".join(f"  ${{{export}}}\n" for export, _ in fragments)
        parts.append(f"\nconst {name}_QUERY = gql`\n{spreads}  {query}\n`;")
    if mutation is not None:
        parts.append(f"\nconst {name}_MUTATION = gql`\n  {mutation}\n`;")
    if subscription is not None:
        parts.append(f"\nconst {name}_SUBSCRIPTION = gql`\n  {subscription}\n`;")
    parts.append(
        _COMPONENT_BODY
        % {
            "name": name,
            "module": module,
            "index": index,
            "factor": factor,
            "hooks": _hook_usage(
                name, query is not None, mutation is not None, subscription is not None
            ),
            "submit": _submit_logic(mutation is not None),
        }
    )
    return "\n".join(parts)


# ---------------------------------------------------------------------------
# Services, hooks, shared components
# ---------------------------------------------------------------------------

_SERVICE = """import { gql } from '@apollo/client';
import { client } from '../../apollo-client';

const GET_%(upper)s_DATA = gql`
  %(query)s
`;

const UPDATE_%(upper)s_DATA = gql`
  %(mutation)s
`;

interface %(name)sConfig {
  apiKey?: string;
  timeout?: number;
  retryCount?: number;
}

export class %(name)s {
  private config: %(name)sConfig;

  constructor(config: %(name)sConfig = {}) {
    this.config = {
      timeout: 5000,
      retryCount: 3,
      ...config,
    };
  }

  async fetchData(id: string, options?: any) {
    try {
      const result = await client.query({
        query: GET_%(upper)s_DATA,
        variables: { id, ...options },
      });
      return this.transformData(result.data);
    } catch (error) {
      console.error('Error fetching data:', error);
      throw this.handleError(error);
    }
  }

  async updateData(id: string, input: any) {
    let retries = this.config.retryCount || 3;

    while (retries > 0) {
      try {
        const result = await client.mutate({
          mutation: UPDATE_%(upper)s_DATA,
          variables: { id, input },
        });
        return result.data;
      } catch (error) {
        retries--;
        if (retries === 0) {
          throw this.handleError(error);
        }
        await this.delay(1000);
      }
    }
  }

  async batchFetch(ids: string[]) {
    return Promise.all(ids.map(id => this.fetchData(id)));
  }

  private transformData(data: any) {
    return {
      ...data,
      _transformed: true,
      _module: '%(module)s',
    };
  }

  private handleError(error: any) {
    return new Error(`%(name)s Service Error: ${error.message}`);
  }

  private delay(ms: number) {
    return new Promise(resolve => setTimeout(resolve, ms));
  }
}

export default new %(name)s();"""

_HOOK = """import { useState, useEffect, useCallback, useRef } from 'react';
import { gql, useLazyQuery } from '@apollo/client';

const %(upper)s_QUERY = gql`
  %(query)s
`;

interface %(name)sOptions {
  autoFetch?: boolean;
  onSuccess?: (data: any) => void;
  onError?: (error: Error) => void;
}

export function %(name)s(
  initialId?: string,
  options: %(name)sOptions = {}
) {
  const [data, setData] = useState<any>(null);
  const [error, setError] = useState<Error | null>(null);
  const isMounted = useRef(true);

  const [fetchQuery, { loading }] = useLazyQuery(%(upper)s_QUERY, {
    onCompleted: (result) => {
      if (isMounted.current) {
        setData(result);
        options.onSuccess?.(result);
      }
    },
    onError: (err) => {
      if (isMounted.current) {
        setError(err);
        options.onError?.(err);
      }
    },
  });

  const fetch = useCallback((id?: string) => {
    if (!id && !initialId) return;
    setError(null);
    fetchQuery({ variables: { id: id || initialId } });
  }, [initialId, fetchQuery]);

  const reset = useCallback(() => {
    setData(null);
    setError(null);
  }, []);

  useEffect(() => {
    if (options.autoFetch && initialId) {
      fetch(initialId);
    }
    return () => {
      isMounted.current = false;
    };
  }, []);

  return {
    data,
    isLoading: loading,
    error,
    fetch,
    reset,
    module: '%(module)s',
  };
}"""

_SHARED_COMPONENT = """import React, { forwardRef, ReactNode } from 'react';
import { gql } from '@apollo/client';

const %(upper)s_FRAGMENT = gql`
  %(fragment)s
`;

export interface %(name)sProps {
  children?: ReactNode;
  className?: string;
  variant?: 'primary' | 'secondary' | 'tertiary';
  size?: 'small' | 'medium' | 'large';
  disabled?: boolean;
  onClick?: (event: React.MouseEvent) => void;
}

export const %(name)s = forwardRef<HTMLDivElement, %(name)sProps>(
  ({
    children,
    className = '',
    variant = 'primary',
    size = 'medium',
    disabled = false,
    onClick,
    ...rest
  }, ref) => {
    const combinedClasses = [
      'shared-component',
      `variant-${variant}`,
      `size-${size}`,
      disabled ? 'disabled' : '',
      className,
    ].filter(Boolean).join(' ');

    return (
      <div
        ref={ref}
        className={combinedClasses}
        onClick={!disabled ? onClick : undefined}
        aria-disabled={disabled}
        role="button"
        tabIndex={disabled ? -1 : 0}
        {...rest}
      >
        {children || <span>%(name)s Component</span>}
      </div>
    );
  }
);

%(name)s.displayName = '%(name)s';

export default %(name)s;"""


def service(name: str, module: str, query: str, mutation: str) -> str:
    return _SERVICE % {
        "name": name,
        "upper": name.upper(),
        "module": module,
        "query": query,
        "mutation": mutation,
    }


def hook(name: str, module: str, query: str) -> str:
    return _HOOK % {"name": name, "upper": name.upper(), "module": module, "query": query}


def shared_component(name: str, fragment: str) -> str:
    return _SHARED_COMPONENT % {"name": name, "upper": name.upper(), "fragment": fragment}


def module_index(module: str, *, with_config: bool = False) -> str:
    cap = title(module)
    lines = [
        f"// Module: {module}",
        "export * from './components';",
        "export * from './services';",
        "export * from './hooks';",
        "export * from './utils';",
        "",
        f"export {{ default as {cap}Service }} from './services/{cap}Service1';",
        f"export {{ use{cap}1 as use{cap} }} from './hooks/use{cap}1';",
    ]
    if with_config:
        lines += [
            "",
            "export const MODULE_CONFIG = {",
            f"  name: '{module}',",
            "  version: '1.0.0',",
            "  dependencies: ['auth', 'api', 'shared'],",
            "};",
        ]
    lines += ["", f"console.log('{module} module loaded');"]
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# GraphQL document files
# ---------------------------------------------------------------------------

_FRAGMENT_FILE = """import { gql } from '@apollo/client';

export const %(upper)s_USER = gql`
  fragment %(name)sUser on User {
    id
    username
    email
    fullName
    avatar
  }
`;

export const %(upper)s_POST = gql`
  fragment %(name)sPost on Post {
    id
    title
    excerpt
    createdAt
    author {
      id
      username
    }
    tags
    likes
  }
`;

export const %(upper)s_COMMENT = gql`
  fragment %(name)sComment on Comment {
    id
    content
    createdAt
    author {
      id
      username
      avatar
    }
    likes
  }
`;

export const %(upper)s_FULL = gql`
  fragment %(name)sFull on User {
    id
    username
    email
    fullName
    bio
    avatar
    createdAt
    updatedAt
    settings {
      theme
      language
      emailNotifications
      pushNotifications
      privacy
    }
    stats {
      postCount
      followerCount
      followingCount
      likeCount
    }
  }
`;"""

_QUERY_FILE = """import { gql } from '@apollo/client';
import { FRAGMENT1_USER, FRAGMENT1_POST } from '../fragments/fragment1';

export const %(upper)s_LIST = gql`
  ${FRAGMENT1_USER}
  ${FRAGMENT1_POST}

  query %(name)sList(
    $first: Int = 20
    $after: String
    $filter: UserFilter
  ) {
    users(first: $first, after: $after, filter: $filter) {
      edges {
        node {
          ...Fragment1User
          posts(first: 5) {
            edges {
              node {
                ...Fragment1Post
              }
            }
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
  }
`;

export const %(upper)s_DETAIL = gql`
  ${FRAGMENT1_USER}

  query %(name)sDetail($id: ID!) {
    user(id: $id) {
      ...Fragment1User
      bio
      createdAt
      updatedAt
      settings {
        theme
        language
        privacy
      }
      stats {
        postCount
        followerCount
      }
      posts(first: 10) {
        edges {
          node {
            id
            title
            tags
            metadata {
              readTime
              wordCount
              language
            }
          }
        }
        totalCount
      }
      followers(first: 10) {
        edges {
          node {
            ...Fragment1User
          }
        }
        totalCount
      }
    }
  }
`;

export const %(upper)s_SEARCH = gql`
  query %(name)sSearch(
    $query: String!
    $type: SearchType = ALL
  ) {
    search(query: $query, type: $type) {
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
  }
`;"""

_MUTATION_FILE = """import { gql } from '@apollo/client';

export const %(upper)s_CREATE_USER = gql`
  mutation %(name)sCreateUser($input: CreateUserInput!) {
    createUser(input: $input) {
      user {
        id
        username
        email
        fullName
      }
      errors {
        field
        message
      }
    }
  }
`;

export const %(upper)s_UPDATE_USER = gql`
  mutation %(name)sUpdateUser($id: ID!, $input: UpdateUserInput!) {
    updateUser(id: $id, input: $input) {
      user {
        id
        username
        bio
        settings {
          theme
          language
        }
      }
      errors {
        field
        message
      }
    }
  }
`;

export const %(upper)s_CREATE_POST = gql`
  mutation %(name)sCreatePost($input: CreatePostInput!) {
    createPost(input: $input) {
      post {
        id
        title
        tags
        published
        createdAt
      }
      errors {
        field
        message
      }
    }
  }
`;

export const %(upper)s_UPDATE_POST = gql`
  mutation %(name)sUpdatePost($id: ID!, $input: UpdatePostInput!) {
    updatePost(id: $id, input: $input) {
      post {
        id
        title
        published
        updatedAt
        metadata {
          readTime
          wordCount
        }
      }
      errors {
        field
        message
      }
    }
  }
`;

export const %(upper)s_DELETE_POST = gql`
  mutation %(name)sDeletePost($id: ID!) {
    deletePost(id: $id) {
      success
      message
      errors {
        message
      }
    }
  }
`;

export const %(upper)s_BATCH_ACTIONS = gql`
  mutation %(name)sBatchActions($userId: ID!, $postId: ID!) {
    followUser(userId: $userId) {
      id
    }
    likePost(postId: $postId) {
      id
      likes
    }
    markNotificationRead(id: "1") {
      id
      read
    }
  }
`;"""

_SUBSCRIPTION_FILE = """import { gql } from '@apollo/client';

export const %(upper)s_POST_SUBSCRIPTION = gql`
  subscription %(name)sPostUpdates($postId: ID!) {
    postUpdated(id: $postId) {
      id
      title
      updatedAt
      author {
        username
      }
    }
  }
`;

export const %(upper)s_USER_SUBSCRIPTION = gql`
  subscription %(name)sUserActivity($userId: ID!) {
    postAdded(authorId: $userId) {
      id
      title
      createdAt
    }
    notificationReceived {
      id
      type
      message
    }
  }
`;

export const %(upper)s_REALTIME_SUBSCRIPTION = gql`
  subscription %(name)sRealtime {
    postAdded {
      id
      title
    }
    notificationReceived {
      id
      type
      relatedUser {
        username
      }
    }
  }
`;"""


def fragment_file(name: str) -> str:
    return _FRAGMENT_FILE % {"name": name, "upper": name.upper()}


def query_file(name: str) -> str:
    return _QUERY_FILE % {"name": name, "upper": name.upper()}


def single_query_file(name: str, query: str) -> str:
    return (
        "import { gql } from '@apollo/client';\n"
        "import { FRAGMENT1_USER, FRAGMENT1_POST } from '../fragments/fragment1';\n"
        "\n"
        f"export const {name.upper()}_QUERY = gql`\n"
        "  ${FRAGMENT1_USER}\n"
        "  ${FRAGMENT1_POST}\n"
        f"  {query}\n"
        "`;"
    )


def mutation_file(name: str) -> str:
    return _MUTATION_FILE % {"name": name, "upper": name.upper()}


def single_mutation_file(name: str, mutation: str) -> str:
    return (
        "import { gql } from '@apollo/client';\n"
        "\n"
        f"export const {name.upper()}_MUTATION = gql`\n"
        f"  {mutation}\n"
        "`;"
    )


def subscription_file(name: str) -> str:
    return _SUBSCRIPTION_FILE % {"name": name, "upper": name.upper()}


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------

_APP = """import React, { Suspense } from 'react';
import { BrowserRouter, Routes, Route } from 'react-router-dom';
import { ApolloProvider, gql } from '@apollo/client';
import { client } from './apollo-client';

%(imports)s

import * as Shared from './shared/components';

const APP_INIT_QUERY = gql`
  query AppInit {
    users(first: 5) {
      edges {
        node {
          id
          username
        }
      }
    }
    trending(limit: 10) {
      ... on Post {
        id
        title
      }
      ... on User {
        id
        username
      }
    }
    notifications(unreadOnly: true) {
      id
      type
      message
      read
    }
  }
`;

const Layout: React.FC<{ children: React.ReactNode }> = ({ children }) => {
  return (
    <div className="app-layout">
      <header className="app-header">
        <h1>Benchmark Application</h1>
        <nav>
          %(nav)s
        </nav>
      </header>
      <main className="app-main">
        {children}
      </main>
      <footer className="app-footer">
        <p>%(count)d modules loaded</p>
      </footer>
    </div>
  );
};

export const App: React.FC = () => {
  return (
    <ApolloProvider client={client}>
      <BrowserRouter>
        <Layout>
          <Suspense fallback={<div>Loading...</div>}>
            <Routes>
              %(routes)s
            </Routes>
          </Suspense>
        </Layout>
      </BrowserRouter>
    </ApolloProvider>
  );
};

export default App;"""

_ENTRY_POINT = """import React from 'react';
import { gql } from '@apollo/client';

const %(upper)s_QUERY = gql`
  query %(name)sQuery {
    users(first: 5) {
      edges {
        node {
          id
          username
        }
      }
    }
  }
`;

export const %(name)sApp: React.FC = () => {
  return (
    <div className="%(lower)s-app">
      <h1>%(name)s Application</h1>
      <p>This is the %(lower)s entry point for the application.</p>
    </div>
  );
};

export default %(name)sApp;"""


def app(modules: Sequence[str]) -> str:
    return _APP % {
        "imports": "\n".join(
            f"import * as {title(m)} from './modules/{m}';" for m in modules
        ),
        "nav": "\n          ".join(f'<a href="/{m}">{title(m)}</a>' for m in modules),
        "routes": "\n              ".join(
            f'<Route path="/{m}/*" element={{<section>{title(m)}</section>}} />'
            for m in modules
        ),
        "count": len(modules),
    }


def entry_point(name: str) -> str:
    return _ENTRY_POINT % {"name": name, "upper": name.upper(), "lower": name.lower()}


# ---------------------------------------------------------------------------
# Enterprise variants (large tier)
# ---------------------------------------------------------------------------

_ENTERPRISE_SERVICE = """import { gql } from '@apollo/client';
import { client } from '../../apollo-client';

const GET_%(upper)s_DATA = gql`
  %(query)s
`;

const UPDATE_%(upper)s_DATA = gql`
  %(mutation)s
`;

interface %(name)sConfig {
  apiKey?: string;
  timeout?: number;
  retryCount?: number;
  cacheTime?: number;
}

export class %(name)s {
  private config: %(name)sConfig;
  private cache: Map<string, { data: any; timestamp: number }>;

  constructor(config: %(name)sConfig = {}) {
    this.config = {
      timeout: 5000,
      retryCount: 3,
      cacheTime: 60000,
      ...config,
    };
    this.cache = new Map();
  }

  async fetchData(id: string, options?: any) {
    const cacheKey = `${id}-${JSON.stringify(options)}`;
    const cached = this.cache.get(cacheKey);

    if (cached && Date.now() - cached.timestamp < (this.config.cacheTime || 60000)) {
      return cached.data;
    }

    try {
      const result = await client.query({
        query: GET_%(upper)s_DATA,
        variables: { id, ...options },
      });

      const data = this.transformData(result.data);
      this.cache.set(cacheKey, { data, timestamp: Date.now() });

      return data;
    } catch (error) {
      console.error('Error fetching data:', error);
      throw this.handleError(error);
    }
  }

  async updateData(id: string, input: any) {
    let retries = this.config.retryCount || 3;

    while (retries > 0) {
      try {
        const result = await client.mutate({
          mutation: UPDATE_%(upper)s_DATA,
          variables: { id, input },
        });

        this.clearCache();
        return result.data;
      } catch (error) {
        retries--;
        if (retries === 0) {
          throw this.handleError(error);
        }
        await this.delay(1000 * (4 - retries));
      }
    }
  }

  async batchFetch(ids: string[]) {
    return Promise.all(ids.map(id => this.fetchData(id)));
  }

  private transformData(data: any) {
    return {
      ...data,
      _transformed: true,
      _module: '%(module)s',
      _timestamp: new Date().toISOString(),
    };
  }

  private handleError(error: any) {
    return new Error(`%(name)s Service Error: ${error.message}`);
  }

  private clearCache() {
    this.cache.clear();
  }

  private delay(ms: number) {
    return new Promise(resolve => setTimeout(resolve, ms));
  }
}

export default new %(name)s();"""

_ENTERPRISE_HOOK = """import { useState, useEffect, useCallback, useRef, useMemo } from 'react';
import { gql, useLazyQuery } from '@apollo/client';

const %(upper)s_QUERY = gql`
  %(query)s
`;

interface %(name)sOptions {
  autoFetch?: boolean;
  pollingInterval?: number;
  subscribeToUpdates?: boolean;
  onSuccess?: (data: any) => void;
  onError?: (error: Error) => void;
}

interface %(name)sResult {
  data: any;
  isLoading: boolean;
  error: Error | null;
  fetch: (id?: string) => void;
  refetch: () => void;
  reset: () => void;
  module: string;
}

export function %(name)s(
  initialId?: string,
  options: %(name)sOptions = {}
): %(name)sResult {
  const [data, setData] = useState<any>(null);
  const [error, setError] = useState<Error | null>(null);
  const isMounted = useRef(true);
  const abortController = useRef<AbortController>();

  const [fetchQuery, { loading, refetch: queryRefetch }] = useLazyQuery(%(upper)s_QUERY, {
    fetchPolicy: 'cache-and-network',
    nextFetchPolicy: 'cache-first',
    pollInterval: options.pollingInterval,
    onCompleted: (result) => {
      if (isMounted.current) {
        setData(result);
        options.onSuccess?.(result);
      }
    },
    onError: (err) => {
      if (isMounted.current) {
        setError(err);
        options.onError?.(err);
      }
    },
  });

  const fetch = useCallback((id?: string) => {
    if (!id && !initialId) return;
    abortController.current?.abort();
    abortController.current = new AbortController();
    setError(null);
    fetchQuery({
      variables: { id: id || initialId },
      context: {
        fetchOptions: {
          signal: abortController.current.signal,
        },
      },
    });
  }, [initialId, fetchQuery]);

  const refetch = useCallback(() => {
    if (queryRefetch) {
      queryRefetch();
    } else {
      fetch(initialId);
    }
  }, [fetch, initialId, queryRefetch]);

  const reset = useCallback(() => {
    abortController.current?.abort();
    setData(null);
    setError(null);
  }, []);

  useEffect(() => {
    if (options.autoFetch && initialId) {
      fetch(initialId);
    }
    return () => {
      isMounted.current = false;
      abortController.current?.abort();
    };
  }, []);

  return useMemo(() => ({
    data,
    isLoading: loading,
    error,
    fetch,
    refetch,
    reset,
    module: '%(module)s',
  }), [data, loading, error, fetch, refetch, reset]);
}"""

_ENTERPRISE_SHARED_COMPONENT = """import React, { forwardRef, ReactNode, HTMLAttributes } from 'react';
import { gql } from '@apollo/client';

const %(upper)s_FRAGMENT = gql`
  %(fragment)s
`;

export interface %(name)sProps extends HTMLAttributes<HTMLDivElement> {
  children?: ReactNode;
  variant?: 'primary' | 'secondary' | 'tertiary' | 'ghost' | 'link';
  size?: 'xs' | 'sm' | 'md' | 'lg' | 'xl';
  disabled?: boolean;
  loading?: boolean;
  fullWidth?: boolean;
  icon?: ReactNode;
  iconPosition?: 'left' | 'right';
  as?: 'button' | 'a' | 'div' | 'span';
}

export const %(name)s = forwardRef<HTMLDivElement, %(name)sProps>(
  ({
    children,
    className = '',
    variant = 'primary',
    size = 'md',
    disabled = false,
    loading = false,
    fullWidth = false,
    icon,
    iconPosition = 'left',
    as: Component = 'div',
    onClick,
    ...rest
  }, ref) => {
    const stateClasses = [
      disabled && 'disabled',
      loading && 'loading',
      fullWidth && 'full-width',
    ].filter(Boolean).join(' ');

    const combinedClasses = [
      'shared-component',
      `variant-${variant}`,
      `size-${size}`,
      stateClasses,
      className,
    ].filter(Boolean).join(' ');

    const handleClick = (e: React.MouseEvent<HTMLDivElement>) => {
      if (!disabled && !loading && onClick) {
        onClick(e);
      }
    };

    return (
      <Component
        ref={ref as any}
        className={combinedClasses}
        onClick={handleClick}
        aria-disabled={disabled || loading}
        aria-busy={loading}
        role={Component === 'div' ? 'button' : undefined}
        tabIndex={disabled || loading ? -1 : 0}
        {...rest}
      >
        {loading && <span className="spinner" />}
        {icon && iconPosition === 'left' && <span className="icon icon-left">{icon}</span>}
        {children || <span>%(name)s Component</span>}
        {icon && iconPosition === 'right' && <span className="icon icon-right">{icon}</span>}
      </Component>
    );
  }
);

%(name)s.displayName = '%(name)s';

export default %(name)s;"""

_ENTERPRISE_FRAGMENT_FILE = """import { gql } from '@apollo/client';

export const %(upper)s_USER = gql`
  fragment %(name)sUser on User {
    id
    username
    email
    fullName
    avatar
    createdAt
  }
`;

export const %(upper)s_POST = gql`
  fragment %(name)sPost on Post {
    id
    title
    excerpt
    createdAt
    author {
      id
      username
      avatar
    }
    tags
    likes
    metadata {
      readTime
      wordCount
    }
  }
`;

export const %(upper)s_COMMENT = gql`
  fragment %(name)sComment on Comment {
    id
    content
    createdAt
    author {
      id
      username
      avatar
    }
    likes
    parentComment {
      id
    }
  }
`;

export const %(upper)s_FULL = gql`
  fragment %(name)sFull on User {
    id
    username
    email
    fullName
    bio
    avatar
    createdAt
    updatedAt
    settings {
      theme
      language
      emailNotifications
      pushNotifications
      privacy
    }
    stats {
      postCount
      followerCount
      followingCount
      likeCount
    }
  }
`;"""

_ENTERPRISE_APP = """import React, { Suspense, useState, useEffect } from 'react';
import { BrowserRouter, Routes, Route, Navigate } from 'react-router-dom';
import { ApolloProvider, gql } from '@apollo/client';
import { client } from './apollo-client';

%(imports)s

import * as Shared from './shared/components';

import { QUERY1_QUERY } from './graphql/queries/query1';
import { MUTATION1_MUTATION } from './graphql/mutations/mutation1';
import { SUBSCRIPTION1_POST_SUBSCRIPTION } from './graphql/subscriptions/subscription1';

const APP_INIT_QUERY = gql`
  query AppInit {
    users(first: 10) {
      edges {
        node {
          id
          username
        }
      }
    }
    trending(limit: 10) {
      ... on Post {
        id
        title
      }
      ... on User {
        id
        username
      }
    }
    notifications(unreadOnly: true) {
      id
      type
      message
      read
    }
  }
`;

const Layout: React.FC<{ children: React.ReactNode }> = ({ children }) => {
  const [sidebarOpen, setSidebarOpen] = useState(true);
  const [theme, setTheme] = useState<'light' | 'dark'>('light');

  useEffect(() => {
    document.body.className = theme;
  }, [theme]);

  return (
    <div className="app-layout">
      <header className="app-header">
        <button onClick={() => setSidebarOpen(!sidebarOpen)} className="menu-toggle">
          Menu
        </button>
        <h1>Enterprise Application</h1>
        <nav className="main-nav">
          %(nav)s
        </nav>
        <button onClick={() => setTheme(theme === 'light' ? 'dark' : 'light')}>
          {theme === 'light' ? 'Dark' : 'Light'}
        </button>
      </header>

      <div className="app-body">
        {sidebarOpen && (
          <aside className="app-sidebar">
            <nav className="sidebar-nav">
              %(sidebar)s
            </nav>
          </aside>
        )}

        <main className="app-main">
          <Suspense fallback={<div className="loading">Loading...</div>}>
            {children}
          </Suspense>
        </main>
      </div>

      <footer className="app-footer">
        <p>Enterprise App - %(count)d modules loaded</p>
      </footer>
    </div>
  );
};

export const App: React.FC = () => {
  return (
    <ApolloProvider client={client}>
      <BrowserRouter>
        <Layout>
          <Routes>
            <Route path="/" element={<Dashboard />} />
            %(routes)s
            <Route path="/admin/*" element={<AdminRoutes />} />
            <Route path="*" element={<NotFound />} />
          </Routes>
        </Layout>
      </BrowserRouter>
    </ApolloProvider>
  );
};

const Dashboard: React.FC = () => {
  return (
    <div className="dashboard">
      <h2>Enterprise Dashboard</h2>
      <div className="dashboard-grid">
        %(cards)s
      </div>
    </div>
  );
};

const AdminRoutes: React.FC = () => {
  return (
    <Routes>
      <Route path="users" element={<div>User Management</div>} />
      <Route path="roles" element={<div>Role Management</div>} />
      <Route path="audit" element={<div>Audit Log</div>} />
      <Route path="*" element={<Navigate to="/admin/users" />} />
    </Routes>
  );
};

const NotFound: React.FC = () => {
  return (
    <div className="not-found">
      <h2>404 - Page Not Found</h2>
    </div>
  );
};

export default App;"""

# Only the first modules get a top nav link and a dashboard card
ENTERPRISE_NAV_LINKS = 10
ENTERPRISE_MODULE_CARDS = 12


def enterprise_service(name: str, module: str, query: str, mutation: str) -> str:
    return _ENTERPRISE_SERVICE % {
        "name": name,
        "upper": name.upper(),
        "module": module,
        "query": query,
        "mutation": mutation,
    }


def enterprise_hook(name: str, module: str, query: str) -> str:
    return _ENTERPRISE_HOOK % {
        "name": name,
        "upper": name.upper(),
        "module": module,
        "query": query,
    }


def enterprise_shared_component(name: str, fragment: str) -> str:
    return _ENTERPRISE_SHARED_COMPONENT % {
        "name": name,
        "upper": name.upper(),
        "fragment": fragment,
    }


def enterprise_fragment_file(name: str) -> str:
    return _ENTERPRISE_FRAGMENT_FILE % {"name": name, "upper": name.upper()}


def enterprise_app(modules: Sequence[str]) -> str:
    cards = (
        f'<div className="module-card">\n'
        f"          <h3>{title(m)}</h3>\n"
        f"          <p>{title(m)} module with components and services</p>\n"
        f'          <a href="/{m}">Open</a>\n'
        f"        </div>"
        for m in modules[:ENTERPRISE_MODULE_CARDS]
    )
    return _ENTERPRISE_APP % {
        "imports": "\n".join(
            f"import * as {title(m)} from './modules/{m}';" for m in modules
        ),
        "nav": "\n          ".join(
            f'<a href="/{m}">{title(m)}</a>' for m in modules[:ENTERPRISE_NAV_LINKS]
        ),
        "sidebar": "\n              ".join(
            f'<a href="/{m}" className="sidebar-link">{title(m)}</a>' for m in modules
        ),
        "routes": "\n            ".join(
            f'<Route path="/{m}/*" element={{<section>{title(m)}</section>}} />'
            for m in modules
        ),
        "cards": "\n        ".join(cards),
        "count": len(modules),
    }
