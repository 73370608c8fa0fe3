"""
Centralized configuration management for the report splitter.

This module provides the filter configuration (the single 'source' option)
and the ConfigManager that loads, validates and caches mapping contracts from
YAML or JSON files, including the contracts packaged with the library.
"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml

from ..exceptions import ConfigurationError, MappingContractError
from ..interfaces import ConfigurationManagerInterface
from ..mapping.enrichers import ENRICHERS, REQUIRED_OPTIONS
from ..models import DataType, EnricherSpec, FieldMapping, LevelMapping, MappingContract


PACKAGED_CONTRACTS_PATH = Path(__file__).resolve().parent.parent / "contracts"
CONTRACT_SUFFIXES = ('.yaml', '.yml', '.json')


@dataclass
class FilterConfig:
    """
    Filter configuration.

    Attributes:
        source: Name of the record field holding the base64-encoded XML report
    """
    source: str = "message"

    RECOGNIZED_OPTIONS = ('source',)

    def __post_init__(self):
        if not isinstance(self.source, str) or not self.source:
            raise ConfigurationError("source must be a non-empty string")

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> 'FilterConfig':
        """
        Create filter configuration from a pipeline options mapping.

        Raises:
            ConfigurationError: If 'source' is missing or an unknown option is present
        """
        unknown = sorted(set(options) - set(cls.RECOGNIZED_OPTIONS))
        if unknown:
            raise ConfigurationError(f"Unknown filter option(s): {', '.join(unknown)}")
        if 'source' not in options:
            raise ConfigurationError("Filter option 'source' is required")
        return cls(source=options['source'])

    @classmethod
    def from_environment(cls) -> 'FilterConfig':
        """Create filter configuration from environment variables."""
        return cls(source=os.environ.get('REPORT_SPLITTER_SOURCE', cls.source))


class ConfigManager(ConfigurationManagerInterface):
    """
    Centralized configuration manager.

    Handles:
    - Filter configuration from environment variables or explicit options
    - Mapping contract loading (YAML or JSON), by file path or packaged name
    - Contract validation and caching
    """

    def __init__(self, base_config_path: Optional[Union[str, Path]] = None):
        """
        Initialize the configuration manager.

        Args:
            base_config_path: Base path for relative contract paths. If None, uses
                              REPORT_SPLITTER_CONFIG_PATH or the current directory.
        """
        self.logger = logging.getLogger(__name__)
        if base_config_path is None:
            base_config_path = os.environ.get('REPORT_SPLITTER_CONFIG_PATH', Path.cwd())
        self.base_config_path = Path(base_config_path)
        self.filter_config = FilterConfig.from_environment()

        # Cache for loaded contracts
        self._mapping_contract_cache: Dict[str, MappingContract] = {}

    def get_filter_config(self) -> FilterConfig:
        return self.filter_config

    def available_contracts(self) -> List[str]:
        """Names of the contracts packaged with the library."""
        return sorted(
            path.stem for path in PACKAGED_CONTRACTS_PATH.iterdir()
            if path.suffix.lower() in CONTRACT_SUFFIXES
        )

    def resolve_contract_path(self, contract_path: str) -> Path:
        """
        Resolve a contract reference to a file.

        A bare name ('cobertura') resolves to the packaged contract; anything
        else is treated as a path relative to base_config_path.
        """
        candidate = Path(contract_path)
        if candidate.suffix.lower() not in CONTRACT_SUFFIXES and len(candidate.parts) == 1:
            for suffix in CONTRACT_SUFFIXES:
                packaged = PACKAGED_CONTRACTS_PATH / f"{contract_path}{suffix}"
                if packaged.exists():
                    return packaged
            raise ConfigurationError(
                f"Unknown contract '{contract_path}'. Available: {', '.join(self.available_contracts())}"
            )
        if not candidate.is_absolute():
            candidate = self.base_config_path / candidate
        return candidate

    def load_mapping_contract(self, contract_path: str) -> MappingContract:
        """
        Load mapping contract from a YAML/JSON file or a packaged contract name.

        Args:
            contract_path: Contract file path (relative to base_config_path) or packaged name

        Returns:
            Loaded and validated mapping contract

        Raises:
            ConfigurationError: If the file cannot be found, read or parsed
            MappingContractError: If the contract structure is invalid
        """
        full_path = self.resolve_contract_path(contract_path)
        cache_key = str(full_path)

        if cache_key in self._mapping_contract_cache:
            self.logger.debug(f"Returning cached mapping contract for {contract_path}")
            return self._mapping_contract_cache[cache_key]

        if not full_path.exists():
            raise ConfigurationError(f"Mapping contract file not found: {full_path}")

        try:
            with open(full_path, 'r', encoding='utf-8') as file:
                if full_path.suffix.lower() in ['.yaml', '.yml']:
                    contract_data = yaml.safe_load(file)
                else:
                    contract_data = json.load(file)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to parse mapping contract file {full_path}: {e}")
        except OSError as e:
            raise ConfigurationError(f"Failed to read mapping contract file {full_path}: {e}")

        contract = self.parse_mapping_contract(contract_data, str(full_path))
        self.validate_mapping_contract(contract)

        self._mapping_contract_cache[cache_key] = contract
        self.logger.info(f"Successfully loaded mapping contract '{contract.name}' from {full_path}")
        return contract

    def parse_mapping_contract(self, contract_data: Any, contract_path: str = "<memory>") -> MappingContract:
        """
        Parse raw contract data into a MappingContract.

        Raises:
            MappingContractError: If required sections are missing or malformed
        """
        if not isinstance(contract_data, dict):
            raise MappingContractError(f"Mapping contract {contract_path} must be a mapping")

        try:
            return MappingContract(
                name=contract_data.get('name', ''),
                root=self._parse_level(contract_data.get('root')),
                description=contract_data.get('description'),
                failure_tag=contract_data.get('failure_tag', '_xmlparsefailure'),
            )
        except (TypeError, ValueError, AttributeError) as e:
            raise MappingContractError(f"Failed to parse mapping contract from {contract_path}: {e}")

    def _parse_level(self, level_data: Optional[Dict[str, Any]]) -> LevelMapping:
        if not isinstance(level_data, dict):
            raise ValueError("each level must be a mapping")

        paths = level_data.get('paths', [])
        if isinstance(paths, str):
            paths = [paths]

        return LevelMapping(
            name=level_data.get('name', ''),
            record_type=level_data.get('record_type', ''),
            paths=list(paths),
            fields=[FieldMapping(**field_data) for field_data in level_data.get('fields') or []],
            guid_field=level_data.get('guid_field'),
            inherit=list(level_data.get('inherit') or []),
            within_first_child=bool(level_data.get('within_first_child', False)),
            requires_children=bool(level_data.get('requires_children', False)),
            enrichers=[
                EnricherSpec(name=enricher.get('name', ''), options=dict(enricher.get('options') or {}))
                for enricher in level_data.get('enrichers') or []
            ],
            children=[self._parse_level(child) for child in level_data.get('children') or []],
        )

    def validate_mapping_contract(self, contract: MappingContract) -> None:
        """
        Validate mapping contract completeness and internal consistency.

        Raises:
            MappingContractError: If the contract is invalid
        """
        errors = []
        known_types = {data_type.value for data_type in DataType}
        level_names = set()

        for level in contract.levels():
            if level.name in level_names:
                errors.append(f"Duplicate level name '{level.name}'")
            level_names.add(level.name)

            targets = set()
            for mapping in level.fields:
                if mapping.data_type not in known_types:
                    errors.append(f"Level '{level.name}': unknown data_type '{mapping.data_type}' "
                                  f"for field '{mapping.target_field}'")
                if mapping.target_field in targets:
                    errors.append(f"Level '{level.name}': duplicate target field '{mapping.target_field}'")
                targets.add(mapping.target_field)

            if level.guid_field:
                if level.guid_field in targets:
                    errors.append(f"Level '{level.name}': guid_field '{level.guid_field}' is also mapped")
                targets.add(level.guid_field)

            for field_name in level.inherit:
                if field_name not in targets:
                    errors.append(f"Level '{level.name}': inherited field '{field_name}' is not produced by the level")

            for enricher in level.enrichers:
                if enricher.name not in ENRICHERS:
                    errors.append(f"Level '{level.name}': unknown enricher '{enricher.name}'")
                    continue
                missing = [option for option in REQUIRED_OPTIONS[enricher.name] if option not in enricher.options]
                if missing:
                    errors.append(f"Level '{level.name}': enricher '{enricher.name}' missing option(s) "
                                  f"{', '.join(missing)}")

        if errors:
            raise MappingContractError(f"Mapping contract validation failed: {'; '.join(errors)}")

        self.logger.debug(f"Mapping contract '{contract.name}' validation passed")

    def get_configuration_summary(self) -> Dict[str, Any]:
        """Summary of the active configuration for logging."""
        return {
            'filter': {'source': self.filter_config.source},
            'base_config_path': str(self.base_config_path),
            'packaged_contracts': self.available_contracts(),
            'cached_contracts': sorted(self._mapping_contract_cache),
        }

    def clear_cache(self) -> None:
        self._mapping_contract_cache.clear()


_global_config_manager: Optional[ConfigManager] = None


def get_config_manager(base_config_path: Optional[Union[str, Path]] = None) -> ConfigManager:
    """
    Get the global configuration manager instance.

    Args:
        base_config_path: Base path for configuration files. Only used on first call.

    Returns:
        Global ConfigManager instance
    """
    global _global_config_manager

    if _global_config_manager is None:
        _global_config_manager = ConfigManager(base_config_path)

    return _global_config_manager


def reset_config_manager() -> None:
    """Reset the global configuration manager instance."""
    global _global_config_manager
    _global_config_manager = None
