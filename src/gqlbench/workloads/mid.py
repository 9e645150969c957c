"""Mid tier: a modular application with services, hooks and shared widgets."""

from __future__ import annotations

from pathlib import Path

from gqlbench.fixtures.primitives import title
from gqlbench.workloads import templates
from gqlbench.workloads.base import Workload


class MidWorkload(Workload):
    """Ten feature modules plus shared components and GraphQL document files.

    The large tier subclasses this and overrides the sizing attributes and
    the per-file hooks below.
    """

    name = "mid"
    exclude = (templates.TEST_EXCLUDE, templates.SPEC_EXCLUDE)

    modules: tuple[str, ...] = (
        "auth",
        "dashboard",
        "profile",
        "settings",
        "admin",
        "analytics",
        "notifications",
        "search",
        "messaging",
        "payments",
    )
    components_per_module = 150
    services_per_module = 20
    hooks_per_module = 15
    utils_per_module = 10
    shared_components = 50
    fragment_files = 30
    query_files = 40
    mutation_files = 30
    subscription_files = 0
    entry_points: tuple[str, ...] = ()

    component_kinds: tuple[str, ...] = (
        "List",
        "Detail",
        "Form",
        "Card",
        "Table",
        "Modal",
        "Widget",
    )
    shared_kinds: tuple[str, ...] = ("Button", "Input", "Layout", "Card", "Modal")

    query_probability = 0.6
    mutation_probability = 0.3
    subscription_probability = 0.0
    util_graphql_probability = 0.3

    def write_sources(self, src: Path) -> None:
        for module in self.modules:
            self.write_module(src / "modules" / module, module)

        shared_dir = src / "shared" / "components"
        for i in range(self.shared_components):
            name = f"Shared{self.choose(self.shared_kinds)}{i + 1}"
            content = self.shared_component(name)
            self.write_file(shared_dir / f"{name}.tsx", content)

        graphql_dir = src / "graphql"
        for i in range(self.fragment_files):
            content = self.fragment_file(f"Fragment{i + 1}")
            self.write_file(graphql_dir / "fragments" / f"fragment{i + 1}.ts", content)
        for i in range(self.query_files):
            content = self.query_file(f"Query{i + 1}")
            self.write_file(graphql_dir / "queries" / f"query{i + 1}.ts", content)
        for i in range(self.mutation_files):
            content = self.mutation_file(f"Mutation{i + 1}")
            self.write_file(graphql_dir / "mutations" / f"mutation{i + 1}.ts", content)
        for i in range(self.subscription_files):
            content = templates.subscription_file(f"Subscription{i + 1}")
            self.write_file(
                graphql_dir / "subscriptions" / f"subscription{i + 1}.ts", content
            )

        self.write_file(src / "App.tsx", self.app_file())
        for entry in self.entry_points:
            self.write_file(src / f"{entry}App.tsx", templates.entry_point(entry))

    def write_module(self, module_dir: Path, module: str) -> None:
        cap = title(module)

        for i in range(self.components_per_module):
            name = f"{cap}{self.choose(self.component_kinds)}Component{i + 1}"
            content = self.module_component(name, module, i)
            self.write_file(module_dir / "components" / f"{name}.tsx", content)

        for i in range(self.services_per_module):
            name = f"{cap}Service{i + 1}"
            content = self.module_service(name, module)
            self.write_file(module_dir / "services" / f"{name}.ts", content)

        for i in range(self.hooks_per_module):
            name = f"use{cap}{i + 1}"
            content = self.module_hook(name, module)
            self.write_file(module_dir / "hooks" / f"{name}.ts", content)

        for i in range(self.utils_per_module):
            name = f"{module}Util{i + 1}"
            content = self.util_file(name, self.chance(self.util_graphql_probability))
            self.write_file(module_dir / "utils" / f"{name}.ts", content)

        self.write_file(module_dir / "index.ts", self.module_index(module))

    # -- Per-file hooks -----------------------------------------------------

    def module_component(self, name: str, module: str, index: int) -> str:
        has_query = self.chance(self.query_probability)
        has_mutation = self.chance(self.mutation_probability)
        query = templates.component_query(name, self.randint(3)) if has_query else None
        mutation = self.component_mutation(name) if has_mutation else None
        return templates.component(
            name, module, index, self.randint(100) + 1, query=query, mutation=mutation
        )

    def component_mutation(self, name: str) -> str:
        return self.choose(templates.COMPONENT_MUTATIONS) % {"name": name}

    def module_service(self, name: str, module: str) -> str:
        return templates.service(
            name, module, self.query(f"Get{name}Data", 1), self.mutation(f"Update{name}Data")
        )

    def module_hook(self, name: str, module: str) -> str:
        return templates.hook(name, module, self.query(name, self.randint(3)))

    def module_index(self, module: str) -> str:
        return templates.module_index(module)

    def query_file(self, name: str) -> str:
        return templates.query_file(name)

    def mutation_file(self, name: str) -> str:
        return templates.mutation_file(name)

    def shared_component(self, name: str) -> str:
        return templates.shared_component(name, self.fragment())

    def fragment_file(self, name: str) -> str:
        return templates.fragment_file(name)

    def app_file(self) -> str:
        return templates.app(self.modules)
