"""Large tier: an enterprise-scale project with deep queries and subscriptions."""

from __future__ import annotations

from gqlbench.workloads import templates
from gqlbench.workloads.mid import MidWorkload

LARGE_FRAGMENTS = (("UserBasicInfo", "fragment1"), ("PostSummary", "fragment2"))


class LargeWorkload(MidWorkload):
    """Fifty modules, roughly twenty thousand files."""

    name = "large"
    exclude = (templates.TEST_EXCLUDE, templates.SPEC_EXCLUDE, templates.STORIES_EXCLUDE)

    modules = (
        *MidWorkload.modules,
        "inventory",
        "orders",
        "customers",
        "suppliers",
        "reports",
        "accounting",
        "hr",
        "marketing",
        "sales",
        "support",
        "logistics",
        "warehouse",
        "shipping",
        "tracking",
        "returns",
        "products",
        "catalog",
        "pricing",
        "promotions",
        "reviews",
        "content",
        "cms",
        "blog",
        "media",
        "documents",
        "api",
        "integrations",
        "webhooks",
        "sync",
        "export",
        "monitoring",
        "logging",
        "metrics",
        "alerts",
        "health",
        "config",
        "features",
        "experiments",
        "rollouts",
        "migrations",
    )
    components_per_module = 300
    services_per_module = 50
    hooks_per_module = 30
    utils_per_module = 20
    shared_components = 200
    fragment_files = 100
    query_files = 150
    mutation_files = 100
    subscription_files = 50
    entry_points = ("Admin", "Customer", "Vendor", "Public")

    component_kinds = (*MidWorkload.component_kinds, "Chart", "Grid", "Panel")
    shared_kinds = (*MidWorkload.shared_kinds, "Dropdown", "Table", "Form", "Alert", "Toast")

    query_probability = 0.7
    mutation_probability = 0.4
    subscription_probability = 0.1
    util_graphql_probability = 0.4

    def module_component(self, name: str, module: str, index: int) -> str:
        has_query = self.chance(self.query_probability)
        has_mutation = self.chance(self.mutation_probability)
        has_subscription = self.chance(self.subscription_probability)
        query = self.deep_query(name, self.randint(4)) if has_query else None
        mutation = self.component_mutation(name) if has_mutation else None
        subscription = self.subscription(name) if has_subscription else None
        return templates.component(
            name,
            module,
            index,
            self.randint(100) + 1,
            query=query,
            mutation=mutation,
            subscription=subscription,
            fragments=LARGE_FRAGMENTS,
        )

    def component_mutation(self, name: str) -> str:
        # Both candidates are built first, so the simple shape always consumes a draw
        options = [self.mutation(name), templates.COMPLEX_CREATE_MUTATION % {"name": name}]
        return self.choose(options)

    def module_index(self, module: str) -> str:
        return templates.module_index(module, with_config=True)

    def query_file(self, name: str) -> str:
        return templates.single_query_file(name, self.deep_query(name, self.randint(4)))

    def mutation_file(self, name: str) -> str:
        return templates.single_mutation_file(name, self.component_mutation(name))

    def module_service(self, name: str, module: str) -> str:
        return templates.enterprise_service(
            name, module, self.query(f"Get{name}Data", 2), self.mutation(f"Update{name}Data")
        )

    def module_hook(self, name: str, module: str) -> str:
        # Fixed complexity; enterprise hooks consume no draw
        return templates.enterprise_hook(name, module, self.query(name, 2))

    def shared_component(self, name: str) -> str:
        return templates.enterprise_shared_component(name, self.fragment())

    def fragment_file(self, name: str) -> str:
        return templates.enterprise_fragment_file(name)

    def app_file(self) -> str:
        return templates.enterprise_app(self.modules)
