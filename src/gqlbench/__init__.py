"""gqlbench: benchmark and parity harness for the graphql-go-gen code generator."""

__version__ = "0.1.0"
