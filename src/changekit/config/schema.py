"""Pydantic validation model for the changekit configuration file.

The only recognized key is ``packages``: the namespaces scanned for
extensions. Other keys are ignored so the file can be shared with other
tools.
"""

from typing import Any, FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, field_validator


class SdkConfig(BaseModel):
    """Root configuration schema.

    Attributes:
        packages: Namespaces to scan, or None when not configured.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    packages: Optional[FrozenSet[str]] = None

    @field_validator("packages", mode="before")
    @classmethod
    def split_packages(cls, v: Any) -> Any:
        """Split a comma-separated value into trimmed, non-empty names."""
        if v is None:
            return None
        if isinstance(v, str):
            if not v.strip():
                return None
            items = v.split(",")
        elif isinstance(v, (list, tuple, set, frozenset)):
            items = v
        else:
            raise ValueError(
                f"'packages' must be a string or a list, got {type(v).__name__}"
            )

        packages = set()
        for item in items:
            if not isinstance(item, str):
                raise ValueError(f"Package names must be strings, got {item!r}")
            if item.strip():
                packages.add(item.strip())
        return frozenset(packages)
