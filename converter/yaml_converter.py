"""YAML contract converter.

Reads contract files (one or more YAML documents, each holding a single
contract entry or a list of them) into Contracts, and writes Contracts back
as YAML documents.
"""

import logging
from pathlib import Path
from typing import Any, Iterable, List, Optional, Sequence, Union

import yaml
from pydantic import ValidationError

from config import settings
from contracts import YamlContract
from converter.model_to_yaml import to_yaml_contract
from converter.resources import FileSystemResourceResolver, ResourceResolver
from converter.yaml_to_model import to_contract
from errors import ConfigurationError, ContractConversionError
from model.contract import Contract

logger = logging.getLogger(__name__)


def _entries(document: Any) -> List[Any]:
    """A parsed document holds a single entry or a list of entries."""
    if document is None:
        return []
    if isinstance(document, list):
        return document
    return [document]


def _describe(entry: Any, index: int) -> str:
    name = entry.get("name") if isinstance(entry, dict) else None
    return str(name) if name else f"#{index}"


def parse_entry(entry: Any, index: int = 0) -> YamlContract:
    """Validate one raw entry against the document schema.

    Raises:
        ConfigurationError: If the entry does not fit the schema.
    """
    label = _describe(entry, index)
    if not isinstance(entry, dict):
        raise ConfigurationError(f"Expected a mapping but got {type(entry).__name__}", contract=label)
    try:
        return YamlContract.model_validate(entry)
    except ValidationError as e:
        raise ConfigurationError(f"Malformed contract: {e}", contract=label) from e


class YamlContractConverter:
    """Converts between YAML contract documents and Contract models."""

    def __init__(self, resolver: Optional[ResourceResolver] = None):
        """Initialize the converter.

        Args:
            resolver: Resource resolver for body files. When omitted,
                      convert_from resolves against settings.resource_root
                      or the contract file's directory.
        """
        self.resolver = resolver

    def is_accepted(self, path: Union[str, Path]) -> bool:
        """Check whether a file looks like a YAML contract."""
        return settings.accepts_extension(Path(path).suffix)

    def _resolver_for(self, path: Path) -> ResourceResolver:
        if self.resolver is not None:
            return self.resolver
        return FileSystemResourceResolver(settings.get_resource_root() or path.parent)

    def load_documents(self, path: Union[str, Path]) -> List[Any]:
        """Parse every YAML document in a file."""
        path = Path(path)
        if not path.is_file():
            raise ConfigurationError(f"Contract file [{path}] does not exist", key=str(path))
        try:
            with path.open(encoding="utf-8") as f:
                return list(yaml.safe_load_all(f))
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Cannot parse [{path}]: {e}", key=str(path)) from e

    def convert_from(
        self,
        path: Union[str, Path],
        resolver: Optional[ResourceResolver] = None,
    ) -> List[Contract]:
        """Read a contract file into a flat list of Contracts."""
        path = Path(path)
        contracts = self.convert_documents(self.load_documents(path), resolver or self._resolver_for(path))
        logger.info("Converted %d contract(s) from %s", len(contracts), path)
        return contracts

    def convert_documents(
        self,
        documents: Iterable[Any],
        resolver: Optional[ResourceResolver] = None,
    ) -> List[Contract]:
        """Convert already parsed documents into a flat list of Contracts.

        Raises:
            ContractConversionError: With the offending contract's name or index attached.
        """
        resolver = resolver or self.resolver
        contracts = []
        entries = [entry for document in documents for entry in _entries(document)]
        for index, entry in enumerate(entries):
            yaml_contract = parse_entry(entry, index)
            try:
                contracts.append(to_contract(yaml_contract, resolver))
            except ContractConversionError as e:
                e.with_contract(_describe(entry, index))
                raise
            logger.debug("Converted contract %s", _describe(entry, index))
        return contracts

    def convert_to(self, contracts: Sequence[Optional[Contract]]) -> List[YamlContract]:
        """Convert Contracts into document entries."""
        return [to_yaml_contract(contract) for contract in contracts]

    def dump_yaml(self, yaml_contracts: Sequence[YamlContract]) -> str:
        """Serialize document entries as a multi-document YAML string."""
        return yaml.safe_dump_all(
            [c.to_document() for c in yaml_contracts],
            sort_keys=False,
            allow_unicode=True,
            width=settings.yaml_width,
        )
