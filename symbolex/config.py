"""
SymbolEx — Extraction Configuration

Dataclass holding the extraction settings. Can be built from
``GlobalConfig`` (YAML + environment), CLI arguments, or direct instantiation.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Optional, Tuple

from utils.common.console_log import MAX_VERBOSITY, Verbosity
from utils.parsers.global_config_parser import ConfigValidationError


def _normalize_extensions(extensions) -> Tuple[str, ...]:
    normalized = []
    for ext in extensions:
        ext = str(ext).strip().lower()
        if ext and not ext.startswith("."):
            ext = "." + ext
        if ext:
            normalized.append(ext)
    return tuple(normalized)


@dataclass(frozen=True)
class ExtractionConfig:
    """Settings for locating marked blocks and writing table files."""

    # ── Source scanning ──────────────────────────────────────────────────
    keyword: str = "localparam"
    source_extensions: Tuple[str, ...] = field(default=(".v", ".sv"))
    encoding: str = "utf-8"

    # ── Output ───────────────────────────────────────────────────────────
    table_extension: str = "txt"

    # ── Logging ──────────────────────────────────────────────────────────
    verbosity: int = Verbosity.WARNING

    def __post_init__(self) -> None:
        if not self.keyword:
            raise ConfigValidationError("Block keyword must not be empty")
        if not 0 <= self.verbosity <= MAX_VERBOSITY:
            raise ConfigValidationError(
                f"Verbosity level must be from 0 to {MAX_VERBOSITY}, got {self.verbosity}"
            )
        object.__setattr__(self, "source_extensions", _normalize_extensions(self.source_extensions))

    # ── Factory ──────────────────────────────────────────────────────────

    @classmethod
    def from_global_config(cls, global_config: Any) -> "ExtractionConfig":
        """Build from a :class:`GlobalConfig`; missing keys keep their defaults."""
        defaults = cls()
        return cls(
            keyword=global_config.get("extraction.keyword", defaults.keyword),
            source_extensions=tuple(
                global_config.get_list("extraction.source_extensions", default=list(defaults.source_extensions))
            ),
            encoding=global_config.get("extraction.encoding", defaults.encoding),
            table_extension=global_config.get("extraction.table_extension", defaults.table_extension),
            verbosity=global_config.get_int("logging.verbosity", defaults.verbosity),
        )

    @classmethod
    def from_cli_args(cls, args: Any, base: Optional["ExtractionConfig"] = None) -> "ExtractionConfig":
        """Apply ``argparse.Namespace`` values on top of *base*."""
        base = base or cls()
        verbosity = getattr(args, "verbosity", None)
        if verbosity is None:
            return base
        return replace(base, verbosity=verbosity)
