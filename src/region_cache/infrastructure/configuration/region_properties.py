"""Region properties files.

ONLY file loading - reads per-region cache properties from a YAML or
JSON document.

Expected layout::

    defaults:
      expiration: 120
    regions:
      users:
        cache.use_sliding_expiration: true
      orders:
        regionPrefix: "shop."
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Union

import yaml

from ...core.exceptions.cache_configuration_error import CacheConfigurationError

logger = logging.getLogger(__name__)


@dataclass
class RegionPropertiesDocument:
    """Provider-wide defaults plus per-region properties."""

    defaults: Dict[str, str] = field(default_factory=dict)
    regions: Dict[str, Dict[str, str]] = field(default_factory=dict)

    def properties_for(self, region_name: str) -> Dict[str, str]:
        """Defaults overlaid with the region's own properties."""
        return {**self.defaults, **self.regions.get(region_name, {})}


def load_region_properties(file_path: Union[str, Path]) -> RegionPropertiesDocument:
    """Load region properties from a YAML or JSON file.

    Raises:
        FileNotFoundError: The file does not exist
        CacheConfigurationError: The file cannot be parsed or has the wrong shape
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Region properties file not found: {file_path}")

    suffix = file_path.suffix.lower()
    with open(file_path, "r", encoding="utf-8") as f:
        try:
            if suffix in [".yaml", ".yml"]:
                data = yaml.safe_load(f)
            elif suffix == ".json":
                data = json.load(f)
            else:
                raise CacheConfigurationError.malformed_file(
                    str(file_path), f"unsupported format '{suffix}'"
                )
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise CacheConfigurationError.malformed_file(str(file_path), str(e)) from e

    data = data or {}
    if not isinstance(data, Mapping):
        raise CacheConfigurationError.malformed_file(str(file_path), "top level must be a mapping")

    regions = data.get("regions") or {}
    if not isinstance(regions, Mapping):
        raise CacheConfigurationError.malformed_file(str(file_path), "'regions' must be a mapping")

    document = RegionPropertiesDocument(
        defaults=_coerce_properties(str(file_path), "defaults", data.get("defaults") or {}),
        regions={
            str(name): _coerce_properties(str(file_path), str(name), props or {})
            for name, props in regions.items()
        },
    )
    logger.debug("Loaded properties for %d regions from %s", len(document.regions), file_path)
    return document


def _coerce_properties(path: str, section: str, raw: Any) -> Dict[str, str]:
    """Properties are strings, as if read from a configuration section."""
    if not isinstance(raw, Mapping):
        raise CacheConfigurationError.malformed_file(path, f"'{section}' must be a mapping")

    properties = {}
    for name, value in raw.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        properties[str(name)] = str(value)
    return properties
