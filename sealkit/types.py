"""Cluster and image resource definitions of the sealer.aliyun.com/v1 API group."""

from __future__ import annotations

from dataclasses import MISSING, Field, dataclass, field, fields
from typing import Any

GROUP = "sealer.aliyun.com"
VERSION = "v1"
GROUP_VERSION = f"{GROUP}/{VERSION}"

_STR = "str"
_BOOL = "bool"
_STR_LIST = "list"
_NESTED = "nested"
_ITEMS = "items"


def _json(key: str | None, kind: str, *, omitempty: bool = True, cls: type | None = None) -> Any:
    """Declare a dataclass field together with its JSON key and value kind.

    When key is None the JSON key is the camel-case form of the field name.
    """
    meta = {"json": key, "kind": kind, "omitempty": omitempty, "cls": cls}
    if kind == _STR:
        return field(default="", metadata=meta)
    if kind == _BOOL:
        return field(default=False, metadata=meta)
    if kind in (_STR_LIST, _ITEMS):
        return field(default_factory=list, metadata=meta)
    if kind == _NESTED and cls is not None:
        return field(default_factory=cls, metadata=meta)
    return field(default=MISSING, metadata=meta)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _key(f: Field) -> str:
    return f.metadata["json"] or _camel(f.name)


def _dump(obj: Any) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for f in fields(obj):
        meta = f.metadata
        key = _key(f)
        value = getattr(obj, f.name)
        kind = meta["kind"]
        if kind == _NESTED:
            # Nested structures are always emitted, even when empty.
            out[key] = _dump(value)
            continue
        if kind == _ITEMS:
            value = [_dump(item) for item in value]
        elif kind == _STR_LIST:
            value = list(value)
        if meta["omitempty"] and not value:
            continue
        out[key] = value
    return out


def _check(value: Any, kind: str, key: str) -> Any:
    if kind == _STR and not isinstance(value, str):
        raise ValueError(f"field {key!r} must be a string, got {type(value).__name__}")
    if kind == _BOOL and not isinstance(value, bool):
        raise ValueError(f"field {key!r} must be a boolean, got {type(value).__name__}")
    if kind == _STR_LIST:
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ValueError(f"field {key!r} must be a list of strings")
        return list(value)
    return value


def _load(cls: type, data: Any) -> Any:
    if data is None:
        return cls()
    if not isinstance(data, dict):
        raise ValueError(f"{cls.__name__} must be a mapping, got {type(data).__name__}")
    kwargs: dict[str, Any] = {}
    for f in fields(cls):
        meta = f.metadata
        key = _key(f)
        if key not in data or data[key] is None:
            continue
        raw = data[key]
        kind = meta["kind"]
        if kind == _NESTED:
            kwargs[f.name] = _load(meta["cls"], raw)
        elif kind == _ITEMS:
            if not isinstance(raw, list):
                raise ValueError(f"field {key!r} must be a list")
            kwargs[f.name] = [_load(meta["cls"], item) for item in raw]
        else:
            kwargs[f.name] = _check(raw, kind, key)
    return cls(**kwargs)


def _mapping(value: Any, key: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"field {key!r} must be a mapping")
    return dict(value)


def _type_meta(data: dict[str, Any]) -> tuple[str, str]:
    api_version = data.get("apiVersion") or ""
    kind = data.get("kind") or ""
    _check(api_version, _STR, "apiVersion")
    _check(kind, _STR, "kind")
    return api_version, kind


def _dump_type_meta(api_version: str, kind: str) -> dict[str, Any]:
    out: dict[str, Any] = {}
    if api_version:
        out["apiVersion"] = api_version
    if kind:
        out["kind"] = kind
    return out


@dataclass
class SSH:
    """Credentials used to reach cluster hosts."""

    user: str = _json(None, _STR)
    passwd: str = _json(None, _STR)
    pk: str = _json(None, _STR)
    pk_passwd: str = _json(None, _STR)


@dataclass
class Network:
    """Cluster network settings."""

    interface: str = _json("interface", _STR)
    cni_name: str = _json("cniName", _STR)
    pod_cidr: str = _json("podCIDR", _STR)
    svc_cidr: str = _json("svcCIDR", _STR)
    without_cni: bool = _json("withoutCNI", _BOOL)


@dataclass
class Hosts:
    """A group of hosts: their sizing and addresses."""

    cpu: str = _json("cpu", _STR)
    memory: str = _json("memory", _STR)
    count: str = _json("count", _STR)
    system_disk: str = _json("systemDisk", _STR)
    data_disks: list[str] = _json("dataDisks", _STR_LIST)
    ip_list: list[str] = _json("ipList", _STR_LIST)


@dataclass
class ClusterSpec:
    """Desired state of a cluster."""

    image: str = _json("image", _STR)
    env: list[str] = _json("env", _STR_LIST)
    provider: str = _json("provider", _STR)
    ssh: SSH = _json("ssh", _NESTED, cls=SSH)
    network: Network = _json("network", _NESTED, cls=Network)
    cert_sans: list[str] = _json("certSANS", _STR_LIST)
    masters: Hosts = _json("masters", _NESTED, cls=Hosts)
    nodes: Hosts = _json("nodes", _NESTED, cls=Hosts)


@dataclass
class Cluster:
    """A cluster resource: type metadata, object metadata, spec and status."""

    api_version: str = ""
    kind: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)
    spec: ClusterSpec = field(default_factory=ClusterSpec)
    status: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> Cluster:
        """Build a cluster from a decoded YAML or JSON document."""
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError("cluster document must be a mapping")
        api_version, kind = _type_meta(data)
        return cls(
            api_version=api_version,
            kind=kind,
            metadata=_mapping(data.get("metadata"), "metadata"),
            spec=_load(ClusterSpec, data.get("spec")),
            status=_mapping(data.get("status"), "status"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the document form of this cluster."""
        out = _dump_type_meta(self.api_version, self.kind)
        out["metadata"] = dict(self.metadata)
        out["spec"] = _dump(self.spec)
        out["status"] = dict(self.status)
        return out

    def get_annotations_by_key(self, key: str) -> str:
        """Return the annotation stored under key, or an empty string."""
        annotations = self.metadata.get("annotations") or {}
        return annotations.get(key, "")


@dataclass
class Layer:
    """One image layer: its digest, instruction type and value."""

    hash: str = _json("hash", _STR, omitempty=False)
    type: str = _json("type", _STR, omitempty=False)
    value: str = _json("value", _STR, omitempty=False)


@dataclass
class ImageSpec:
    """Desired state of an image."""

    id: str = _json("id", _STR, omitempty=False)
    hash: str = _json("hash", _STR, omitempty=False)
    merged_layer: str = _json("mergedLayer", _STR, omitempty=False)
    layers: list[Layer] = _json("layers", _ITEMS, omitempty=False, cls=Layer)


@dataclass
class Image:
    """An image resource: type metadata, object metadata, spec and status."""

    api_version: str = ""
    kind: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)
    spec: ImageSpec = field(default_factory=ImageSpec)
    status: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> Image:
        """Build an image from a decoded YAML or JSON document."""
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError("image document must be a mapping")
        api_version, kind = _type_meta(data)
        return cls(
            api_version=api_version,
            kind=kind,
            metadata=_mapping(data.get("metadata"), "metadata"),
            spec=_load(ImageSpec, data.get("spec")),
            status=_mapping(data.get("status"), "status"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the document form of this image."""
        out = _dump_type_meta(self.api_version, self.kind)
        out["metadata"] = dict(self.metadata)
        out["spec"] = _dump(self.spec)
        out["status"] = dict(self.status)
        return out