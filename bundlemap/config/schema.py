"""Configuration schema definitions using Pydantic for validation.

This module provides strongly-typed configuration for the asset filter,
the bundle pack rules and the build step itself. Using Pydantic ensures
configuration errors are caught early with clear error messages.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

PACK_FILE = "file"
PACK_DIRECTORY = "directory"
PACK_EXPLICIT = "explicit"
PACK_MODES = (PACK_FILE, PACK_DIRECTORY, PACK_EXPLICIT)


class AssetFilterConfig(BaseModel):
    """Configuration for the asset validity predicate.

    Attributes:
        ignore_extensions: File extensions never placed in a bundle.
        ignore_patterns: Glob patterns of paths never placed in a bundle.
    """

    ignore_extensions: List[str] = Field(
        default_factory=lambda: [".cs", ".js", ".boo", ".dll", ".meta"]
    )
    ignore_patterns: List[str] = Field(default_factory=list)

    model_config = {"extra": "forbid"}

    @field_validator("ignore_extensions")
    @classmethod
    def normalize_extensions(cls, v: List[str]) -> List[str]:
        """Lower-case extensions and make sure they start with a dot."""
        normalized = []
        for ext in v:
            ext = ext.strip().lower()
            if not ext:
                raise ValueError("ignore_extensions must not contain empty entries")
            normalized.append(ext if ext.startswith(".") else f".{ext}")
        return normalized


class BundleRuleConfig(BaseModel):
    """A single pattern-based bundle rule.

    Attributes:
        pattern: Glob matched against the asset path.
        pack: How the label is derived (file, directory, explicit).
        label: Fixed label, required for the explicit pack mode.
        variant: Variant for matching assets (None means default).
    """

    pattern: str
    pack: str = PACK_DIRECTORY
    label: Optional[str] = None
    variant: Optional[str] = None

    model_config = {"extra": "forbid"}

    @field_validator("pack")
    @classmethod
    def validate_pack(cls, v: str) -> str:
        """Validate that the pack mode is known."""
        if v not in PACK_MODES:
            raise ValueError(f"Invalid pack mode '{v}'. Valid modes: {PACK_MODES}")
        return v

    @model_validator(mode="after")
    def validate_explicit_label(self) -> "BundleRuleConfig":
        """Explicit rules must name their label."""
        if self.pack == PACK_EXPLICIT and not self.label:
            raise ValueError(f"Rule '{self.pattern}' uses explicit pack without a label")
        return self


class PackRulesConfig(BaseModel):
    """Ordered bundle rules; the first matching pattern wins.

    Attributes:
        rules: Rules evaluated in order.
        fallback_pack: Pack mode for paths no rule matches.
        lowercase_labels: Lower-case every derived label.
    """

    rules: List[BundleRuleConfig] = Field(default_factory=list)
    fallback_pack: str = PACK_DIRECTORY
    lowercase_labels: bool = True

    model_config = {"extra": "forbid"}

    @field_validator("fallback_pack")
    @classmethod
    def validate_fallback(cls, v: str) -> str:
        """Fallback cannot be explicit because it has no label."""
        if v not in (PACK_FILE, PACK_DIRECTORY):
            raise ValueError(
                f"Invalid fallback pack mode '{v}'. Valid modes: {PACK_FILE}, {PACK_DIRECTORY}"
            )
        return v


class BuildMapConfig(BaseModel):
    """Top-level configuration for one build map invocation.

    Attributes:
        default_variant: Variant name meaning "no variant".
        check_filename_collisions: Fail when a bundle holds two same-named files.
        show_progress: Render progress bars from the CLI.
        asset_filter: Asset validity predicate configuration.
        pack_rules: Bundle rule configuration.
    """

    default_variant: str = Field(default="unity3d", min_length=1)
    check_filename_collisions: bool = True
    show_progress: bool = True
    asset_filter: AssetFilterConfig = Field(default_factory=AssetFilterConfig)
    pack_rules: PackRulesConfig = Field(default_factory=PackRulesConfig)

    model_config = {"extra": "forbid"}

    @classmethod
    def default(cls) -> "BuildMapConfig":
        return cls()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BuildMapConfig":
        """Create configuration from dictionary.

        Args:
            data: Configuration dictionary.

        Returns:
            BuildMapConfig instance.

        Raises:
            ValidationError: If configuration is invalid.
        """
        return cls.model_validate(data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return self.model_dump()
