# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Package-level accumulator for import paths requested by templates."""

from typing import Iterable, List, Set


class ImportManager:
    """Collects import paths for one generated file.

    Registration order does not matter; finalize() returns each path once,
    sorted, so the import block is stable across runs.
    """

    def __init__(self) -> None:
        self._paths: Set[str] = set()

    def register(self, path: str) -> None:
        if not isinstance(path, str) or not path.strip():
            raise ValueError(f"invalid import path: {path!r}")
        self._paths.add(path.strip())

    def extend(self, paths: Iterable[str]) -> None:
        for path in paths:
            self.register(path)

    def finalize(self) -> List[str]:
        return sorted(self._paths)

    def __contains__(self, path: object) -> bool:
        return path in self._paths

    def __len__(self) -> int:
        return len(self._paths)
