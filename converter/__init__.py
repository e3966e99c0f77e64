"""Converter between YAML contract documents and the in-memory model."""

from .yaml_converter import YamlContractConverter, parse_entry
from .yaml_to_model import to_contract, to_contracts, inject_body_matchers, body_marker
from .model_to_yaml import to_yaml_contract, body_matchers, to_stub_matcher_type, to_test_matcher_type
from .resources import ResourceResolver, FileSystemResourceResolver, InMemoryResourceResolver
from .templates import HandlebarsTemplate

__all__ = [
    "YamlContractConverter",
    "parse_entry",
    "to_contract",
    "to_contracts",
    "inject_body_matchers",
    "body_marker",
    "to_yaml_contract",
    "body_matchers",
    "to_stub_matcher_type",
    "to_test_matcher_type",
    "ResourceResolver",
    "FileSystemResourceResolver",
    "InMemoryResourceResolver",
    "HandlebarsTemplate",
]
