"""
loader.report - Structured result of a product load.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class LoadReport:
    processed: int = 0
    loaded: int = 0
    failed: int = 0
    dry_run: bool = False
    failures: list[dict] = field(default_factory=list)   # [{row, data, error}]
    warnings: list[dict] = field(default_factory=list)   # [{row, message}]
    loaded_ids: list[int] = field(default_factory=list)

    def add_failure(self, row: int, data: list[str], error: str):
        self.failures.append({"row": row, "data": list(data), "error": error})
        self.failed += 1

    def add_loaded(self, obj_id: int | None):
        self.loaded += 1
        if obj_id is not None:
            self.loaded_ids.append(obj_id)

    def add_warning(self, row: int, message: str):
        self.warnings.append({"row": row, "message": message})

    def to_dict(self) -> dict:
        return {
            "processed_count": self.processed,
            "loaded_count": self.loaded,
            "failed_count": self.failed,
            "dry_run": self.dry_run,
            "failures": self.failures,
            "warnings": self.warnings,
        }
