"""Reading and writing YAML documents."""

from __future__ import annotations

from typing import Any

import yaml

from sealkit.fileutil import write_file


def unmarshal_yaml_file(file: str) -> Any:
    """Load the YAML document stored in file."""
    with open(file, "rb") as handle:
        return yaml.safe_load(handle)


def marshal_yaml_to_file(file: str, obj: Any) -> None:
    """Write obj as YAML to file; objects with to_dict() are written in document form."""
    data = obj.to_dict() if hasattr(obj, "to_dict") else obj
    text = yaml.safe_dump(data, default_flow_style=False, sort_keys=True)
    write_file(file, text)