"""Typed configuration dataclasses for popdash.

Provides strongly-typed configuration objects that can be used throughout
the application for better type safety and IDE support.
"""
from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import Dict, Any


@dataclass
class ApiConfig:
    """Population REST endpoint configuration."""
    base_url: str = "https://datausa.io/api/data"
    timeout: float = 30
    retries: int = 5

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class TableConfig:
    """Data table defaults."""
    page_size: int = 10
    empty_state_message: str = "No data available"
    search_placeholder: str = "Search..."

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class FiltersConfig:
    """Initial global filter selection."""
    default_state: str = "Nation"
    default_year: str = "latest"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ExportConfig:
    """CSV export configuration."""
    directory: str = "data/export"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class AppConfig:
    """Root application configuration with all subsections."""
    log_level: str = "INFO"
    api: ApiConfig = field(default_factory=ApiConfig)
    table: TableConfig = field(default_factory=TableConfig)
    filters: FiltersConfig = field(default_factory=FiltersConfig)
    export: ExportConfig = field(default_factory=ExportConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for code paths that take plain config dicts."""
        return {
            "log_level": self.log_level,
            "api": self.api.to_dict(),
            "table": self.table.to_dict(),
            "filters": self.filters.to_dict(),
            "export": self.export.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> AppConfig:
        """Create AppConfig from a dictionary.

        Unknown keys inside a section are ignored so that stray environment
        variables do not break startup.

        Args:
            data: Configuration dictionary

        Returns:
            AppConfig instance
        """
        def _section(section_cls, values):
            values = values or {}
            known = {k: v for k, v in values.items() if k in section_cls.__dataclass_fields__}
            return section_cls(**known)

        return cls(
            log_level=data.get("log_level", "INFO"),
            api=_section(ApiConfig, data.get("api")),
            table=_section(TableConfig, data.get("table")),
            filters=_section(FiltersConfig, data.get("filters")),
            export=_section(ExportConfig, data.get("export")),
        )


__all__ = [
    "ApiConfig",
    "TableConfig",
    "FiltersConfig",
    "ExportConfig",
    "AppConfig",
]
