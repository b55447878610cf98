from __future__ import annotations

import json
import re
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping

from critsplit.errors import ConfigError
from critsplit.logs import resolve_level

# camelCase option names accepted alongside the field names.
_ALIASES = {
    "additionalCss": "additional_css",
    "additionalMatchers": "additional_matchers",
    "logLevel": "log_level",
}


@dataclass(frozen=True)
class SplitConfig:
    additional_css: str = ""  # raw CSS appended to every critical output
    additional_matchers: tuple = ()  # regex strings, re.Pattern or callables
    log_level: str = "info"
    include: str = r"\.css$"  # which asset names are stylesheets
    minify: bool = True

    def __post_init__(self) -> None:
        resolve_level(self.log_level)
        matchers = self.additional_matchers
        if matchers is None:
            matchers = ()
        elif isinstance(matchers, (str, re.Pattern)) or callable(matchers):
            matchers = (matchers,)
        object.__setattr__(self, "additional_matchers", tuple(matchers))
        if self.additional_css is None:
            object.__setattr__(self, "additional_css", "")
        try:
            re.compile(self.include)
        except re.error as exc:
            raise ConfigError(f"Invalid include pattern {self.include!r}: {exc}") from exc

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> SplitConfig:
        """Build a config from field names or their camelCase aliases."""
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = _ALIASES.get(key, key)
            if name not in known:
                raise ConfigError(f"Unknown option {key!r}")
            kwargs[name] = value
        return cls(**kwargs)

    @classmethod
    def from_file(cls, path: str | Path) -> SplitConfig:
        """Load a JSON object of options from *path*."""
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ConfigError(f"{path}: invalid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"{path}: expected a JSON object")
        return cls.from_mapping(data)

    def merged(self, **overrides: Any) -> SplitConfig:
        """Return a copy with every non-None override applied."""
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        values.update({k: v for k, v in overrides.items() if v is not None})
        return SplitConfig(**values)
