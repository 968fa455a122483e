"""Internal helpers shared by the configuration layer."""
from __future__ import annotations

from .merge import deep_merge, merge_arrays
from .yaml_io import read_yaml

__all__ = ["deep_merge", "merge_arrays", "read_yaml"]
