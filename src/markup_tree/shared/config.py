"""Configuration classes for markup rendering and tree transforms.

Configuration objects are plain dataclasses validated in ``__post_init__``;
the aggregate :class:`MarkupConfig` is frozen and shareable between threads.
"""

import json
from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import Any, Dict, List, Optional


class VoidChildrenPolicy(Enum):
    """What the serializer does with children attached to a void branch."""

    IGNORE = auto()  # Drop silently
    WARN = auto()    # Drop and log a warning
    RAISE = auto()   # Raise VoidElementError


@dataclass
class RenderConfig:
    """Configuration for the serializer."""

    void_children_policy: VoidChildrenPolicy = VoidChildrenPolicy.WARN
    skip_empty_attributes: bool = True
    collect_metrics: bool = True

    def __post_init__(self) -> None:
        """Validate render configuration."""
        if not isinstance(self.void_children_policy, VoidChildrenPolicy):
            raise ValueError("void_children_policy must be a VoidChildrenPolicy")


@dataclass
class TransformConfig:
    """Configuration for whole-tree transforms."""

    max_steps: Optional[int] = None
    log_summary: bool = True

    def __post_init__(self) -> None:
        """Validate transform configuration."""
        if self.max_steps is not None and self.max_steps <= 0:
            raise ValueError("max_steps must be > 0 or None")


@dataclass
class GlobalConfig:
    """Settings that apply across all components."""

    logging_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    enable_correlation_tracking: bool = True

    def __post_init__(self) -> None:
        """Validate global configuration."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.logging_level not in valid_levels:
            raise ValueError(f"logging_level must be one of {valid_levels}")


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


_COMPONENTS = ("render", "transform", "global_")


@dataclass(frozen=True)
class MarkupConfig:
    """Complete configuration for rendering and transforming markup trees."""

    render: RenderConfig = field(default_factory=RenderConfig)
    transform: TransformConfig = field(default_factory=TransformConfig)
    global_: GlobalConfig = field(default_factory=GlobalConfig)

    def __post_init__(self) -> None:
        """Validate the complete configuration."""
        try:
            self.render.__post_init__()
            self.transform.__post_init__()
            self.global_.__post_init__()
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

    def override(self, **kwargs: Any) -> "MarkupConfig":
        """Create a new configuration with specific overrides.

        Nested fields use double underscores:

            >>> config = MarkupConfig().override(
            ...     render__void_children_policy=VoidChildrenPolicy.RAISE,
            ...     transform__max_steps=10_000,
            ...     global___enable_correlation_tracking=False,
            ... )
        """
        nested_overrides: Dict[str, Dict[str, Any]] = {}
        for key, value in kwargs.items():
            component, sep, field_name = key.rpartition("__")
            if not sep or component not in _COMPONENTS:
                raise ConfigValidationError(
                    f"Unknown configuration field: {key}",
                    field_name=key,
                    suggestions=[f"{name}__<field>" for name in _COMPONENTS],
                )
            nested_overrides.setdefault(component, {})[field_name] = value

        new_fields = {}
        for component, overrides in nested_overrides.items():
            try:
                new_fields[component] = replace(getattr(self, component), **overrides)
            except (TypeError, ValueError) as e:
                raise ConfigValidationError(str(e), field_name=component) from e
        return replace(self, **new_fields)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        def _dataclass_to_dict(obj: Any) -> Any:
            if hasattr(obj, "__dataclass_fields__"):
                return {
                    name: _dataclass_to_dict(getattr(obj, name))
                    for name in obj.__dataclass_fields__
                }
            if isinstance(obj, Enum):
                return obj.name
            return obj

        return _dataclass_to_dict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MarkupConfig":
        """Create configuration from dictionary."""
        render_data = dict(data.get("render", {}))
        policy = render_data.get("void_children_policy")
        if isinstance(policy, str):
            try:
                render_data["void_children_policy"] = VoidChildrenPolicy[policy]
            except KeyError as e:
                raise ConfigValidationError(
                    f"Unknown void_children_policy: {policy}",
                    field_name="render.void_children_policy",
                    suggestions=[member.name for member in VoidChildrenPolicy],
                ) from e
        try:
            return cls(
                render=RenderConfig(**render_data),
                transform=TransformConfig(**data.get("transform", {})),
                global_=GlobalConfig(**data.get("global_", {})),
            )
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(str(e)) from e

    @classmethod
    def from_json(cls, json_str: str) -> "MarkupConfig":
        """Create configuration from JSON string."""
        return cls.from_dict(json.loads(json_str))

    # Preset factory methods
    @classmethod
    def strict(cls) -> "MarkupConfig":
        """Preset that refuses void children and bounds transforms."""
        return cls(
            render=RenderConfig(void_children_policy=VoidChildrenPolicy.RAISE),
            transform=TransformConfig(max_steps=10_000_000),
        )

    @classmethod
    def lenient(cls) -> "MarkupConfig":
        """Preset that drops void children silently and skips metrics."""
        return cls(
            render=RenderConfig(
                void_children_policy=VoidChildrenPolicy.IGNORE,
                collect_metrics=False,
            ),
            transform=TransformConfig(log_summary=False),
        )
