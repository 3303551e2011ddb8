from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

from loguru import logger

if TYPE_CHECKING:
    from loguru import Record
else:  # pragma: no cover - runtime fallback for typing-only import
    Record = dict[str, Any]  # type: ignore[assignment]

PACKAGE_ROOT = "ccc_cli"
DEFAULT_LEVEL_KEY = "default"

logger.remove()


def configure_file_logging(
    log_file: Path,
    *,
    base_level: str,
    module_levels: Mapping[str, str] | None = None,
    rotation: str = "1 MB",
    retention: int = 5,
) -> None:
    """Send ccc log records to a rotating file, filtered per module."""

    logger.remove()
    log_file.parent.mkdir(parents=True, exist_ok=True)
    thresholds = normalize_levels(module_levels or {}, base_level)
    logger.add(
        log_file,
        level="TRACE",  # the filter decides what to keep
        rotation=rotation,
        retention=retention,
        filter=ModuleLevelFilter(thresholds),
    )
    logger.debug("Configured log levels: {levels}", levels=thresholds)


def normalize_levels(levels: Mapping[str, str], base_level: str) -> dict[str, int]:
    """Map `module -> level name` pairs to numeric thresholds.

    Module keys are lower-cased and stripped of trailing dots; the empty key and
    `default` both address the fallback threshold.
    """
    thresholds: dict[str, int] = {}
    for module, level_name in levels.items():
        key = module.strip().rstrip(".").lower() or DEFAULT_LEVEL_KEY
        thresholds[key] = level_to_no(level_name)
    thresholds.setdefault(DEFAULT_LEVEL_KEY, level_to_no(base_level))
    return thresholds


def level_to_no(level_name: str) -> int:
    try:
        return logger.level(level_name.strip().upper()).no
    except ValueError as exc:  # pragma: no cover - loguru raises ValueError
        raise ValueError(f"Invalid log level '{level_name}'") from exc


class ModuleLevelFilter:
    """Keep a record when its level reaches the threshold of its closest module key."""

    def __init__(self, thresholds: Mapping[str, int]) -> None:
        self._thresholds = dict(thresholds)
        # longest prefix first so `ccc_cli.hooks.decoder` beats `ccc_cli.hooks`
        self._prefixes = sorted(
            (key for key in self._thresholds if key != DEFAULT_LEVEL_KEY),
            key=len,
            reverse=True,
        )

    def __call__(self, record: Record) -> bool:
        return record["level"].no >= self.threshold_for(self.module_of(record))

    def threshold_for(self, module: str | None) -> int:
        if module:
            for prefix in self._prefixes:
                if module == prefix or module.startswith(f"{prefix}."):
                    return self._thresholds[prefix]
        return self._thresholds[DEFAULT_LEVEL_KEY]

    @staticmethod
    def module_of(record: Record) -> str | None:
        file_info = record.get("file")
        path_str = getattr(file_info, "path", None)
        if path_str:
            parts = Path(path_str).with_suffix("").parts
            for idx, part in enumerate(parts):
                if part.lower() == PACKAGE_ROOT:
                    return ".".join(parts[idx:]).lower()
        module_name = record.get("module")
        return module_name.lower() if module_name else None
