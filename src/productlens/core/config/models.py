"""
Pydantic configuration models for ProductLens.

These models provide type-safe configuration with validation for:
- Application settings
- Custom site strategies
- Logging
"""

from __future__ import annotations

from pathlib import Path

from cssselect import GenericTranslator, SelectorError
from pydantic import BaseModel, Field, field_validator, model_validator

from productlens.core.extract import locators
from productlens.core.extract.strategies import Strategy, StrategyRegistry, default_registry

BUILTIN_STRATEGY_NAMES = frozenset({"amazon", "flipkart", "generic"})


# =============================================================================
# Strategy Configuration
# =============================================================================


class LocatorConfig(BaseModel):
    """A single candidate lookup for a field.

    Exactly one of css or meta must be set.
    """

    css: str | None = Field(
        default=None,
        description="CSS selector whose first match supplies the text",
    )
    meta: str | None = Field(
        default=None,
        description="Meta tag name or property, e.g. og:title",
    )

    @field_validator("css")
    @classmethod
    def css_must_compile(cls, v: str | None) -> str | None:
        """Reject selectors that cssselect cannot translate."""
        if v is None:
            return v
        try:
            GenericTranslator().css_to_xpath(v)
        except SelectorError as e:
            raise ValueError(f"invalid CSS selector {v!r}: {e}") from e
        return v

    @model_validator(mode="after")
    def exactly_one_target(self) -> LocatorConfig:
        if (self.css is None) == (self.meta is None):
            raise ValueError("locator needs exactly one of 'css' or 'meta'")
        return self

    def to_locator(self) -> locators.Locator:
        if self.meta is not None:
            return locators.meta(self.meta)
        return locators.css(self.css)


class StrategyConfig(BaseModel):
    """A custom site strategy.

    Loaded from YAML and registered ahead of the generic strategy.
    """

    name: str = Field(
        ...,
        description="Unique strategy identifier",
        pattern=r"^[a-z][a-z0-9_-]*$",
    )
    display_name: str | None = Field(
        default=None,
        description="Human-readable site name",
    )
    url_fragments: list[str] = Field(
        ...,
        min_length=1,
        description="Substrings identifying the site in a URL (case-insensitive)",
    )
    title: list[LocatorConfig] = Field(
        default_factory=list,
        description="Title candidates in priority order",
    )
    price: list[LocatorConfig] = Field(
        default_factory=list,
        description="Price candidates in priority order",
    )
    description: list[LocatorConfig] = Field(
        default_factory=list,
        description="Description candidates in priority order",
    )

    @field_validator("url_fragments")
    @classmethod
    def fragments_lowercase(cls, v: list[str]) -> list[str]:
        """Lower-case fragments and drop blanks."""
        fragments = [fragment.strip().lower() for fragment in v if fragment.strip()]
        if not fragments:
            raise ValueError("url_fragments must contain at least one non-blank fragment")
        return fragments

    def to_strategy(self) -> Strategy:
        return Strategy(
            name=self.name,
            display_name=self.display_name,
            url_fragments=tuple(self.url_fragments),
            title=tuple(item.to_locator() for item in self.title),
            price=tuple(item.to_locator() for item in self.price),
            description=tuple(item.to_locator() for item in self.description),
        )


# =============================================================================
# Logging Configuration
# =============================================================================


class LoggingConfig(BaseModel):
    """Logging settings."""

    level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
    )
    file: Path | None = Field(
        default=None,
        description="Log file path",
    )
    json_format: bool = Field(
        default=True,
        description="Use JSON format for file logs",
    )
    rich_console: bool = Field(
        default=True,
        description="Use Rich for console output",
    )

    @field_validator("level")
    @classmethod
    def level_known(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {v}")
        return level


# =============================================================================
# Application Configuration
# =============================================================================


class AppConfig(BaseModel):
    """Root application configuration.

    This is the main configuration object loaded from app.yaml.
    """

    strategies_dir: Path | None = Field(
        default=None,
        description="Directory of additional strategy YAML files",
    )
    strategies: list[StrategyConfig] = Field(
        default_factory=list,
        description="Inline custom strategies, tried before files from strategies_dir",
    )
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("strategies")
    @classmethod
    def strategy_names_unique(cls, v: list[StrategyConfig]) -> list[StrategyConfig]:
        """Ensure custom strategies neither repeat nor shadow built-ins."""
        seen: set[str] = set()
        for strategy in v:
            if strategy.name in BUILTIN_STRATEGY_NAMES:
                raise ValueError(f"strategy name '{strategy.name}' is reserved for a built-in strategy")
            if strategy.name in seen:
                raise ValueError(f"duplicate strategy name '{strategy.name}'")
            seen.add(strategy.name)
        return v

    def build_registry(
        self,
        extra: list[StrategyConfig] | None = None,
    ) -> StrategyRegistry:
        """Build a registry of built-in plus configured strategies.

        Built-in site strategies keep priority; custom ones follow in
        declaration order, and the generic strategy stays last.

        Args:
            extra: Additional strategies (e.g. loaded from strategies_dir)

        Returns:
            StrategyRegistry
        """
        registry = default_registry()
        for config in [*self.strategies, *(extra or [])]:
            registry.register(config.to_strategy())
        return registry
