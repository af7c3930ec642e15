"""Configuration parsing for qwhtml.yaml"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel


class CompilerConfig(BaseModel):
    """Settings shared by the compiler and the expression layer"""

    # identifier of the output sink in lowered programs
    sink: str = "w"
    # raise on undefined variables instead of rendering them empty
    strict_undefined: bool = True
    # extra names visible to every expression
    globals: dict[str, Any] = {}

    @classmethod
    def load(cls, path: Path) -> "CompilerConfig":
        """Load config from yaml file"""
        if not path.exists():
            return cls()

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.model_validate(data)
