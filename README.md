# sealkit

Utilities for describing and preparing Kubernetes cluster images.

## Modules

- `sealkit.types` — the `sealer.aliyun.com/v1` resources: `Cluster`,
  `ClusterSpec`, `Hosts`, `SSH`, `Network`, `Image`, `ImageSpec` and `Layer`.
  `Cluster.from_dict` / `Image.from_dict` build them from decoded YAML or
  JSON documents, `to_dict` returns the document form, and
  `Cluster.get_annotations_by_key` reads an annotation from the metadata.
- `sealkit.cidr` — `parse_cidr` returns a `CIDR` with `ip()`, `network()`,
  `mask()`, `mask_size()`, `cidr()`, `is_ipv4()` and `is_ipv6()`;
  `parse_cidr_string` normalises a range such as `192.168.1.3/24`.
- `sealkit.iplist` — `append_ip_list`, `reduce_ip_list`, `sort_ip_list`
  (sorts in place), `get_host_ip`, `get_host_ip_slice` and `get_diff_hosts`
  (added and removed addresses between two `Hosts`).
- `sealkit.fileutil` — reading, writing, copying and removing files and
  directories (`read_all`, `write_file`, `copy_dir`, `copy_single_file`,
  `recursion_copy`, `append_file`, `remove_file_content`,
  `count_dir_files`, `mk_tmpdir` and others).
- `sealkit.hashing` — `md5`, `file_md5` and `gen_unique_id`.
- `sealkit.execs` — running local commands: `cmd`, `cmd_output`,
  `run_simple_cmd`, `check_cmd_is_exist`, `executable_file_path`.
- `sealkit.yamlio` — `unmarshal_yaml_file` and `marshal_yaml_to_file`
  (objects with `to_dict()` are written in document form).
- `sealkit.compress` — `compress` and `root_dir_not_included` build
  gzip-compressed tar archives of absolute paths with fixed owner names;
  `decompress` extracts them, rejecting names that would escape the
  destination and restoring modes and times.
- `sealkit.sha256` — `SHA256` with `check_sum`, `tar_check_sum` and
  `empty_digest`; `check_sum_and_place_layer` archives a directory and
  extracts it under `<layer_dir>/<digest hex>`.
- `sealkit.mount` — `DefaultMounter` merges layers by copying them into a
  target, `Overlay2Mounter` uses an overlay mount; `new_mount_driver()`
  picks the overlay one where `supports_overlay()` is true.
- `sealkit.docker_config` — registry credentials in a `{"auths": {...}}`
  file: `docker_config`, `set_docker_config`,
  `get_docker_auth_info_from_docker`, `DockerInfo` and `AuthConfig`.
- `sealkit.version` — `get()` returns an `Info` with `to_dict()` and
  `to_json()`.

## Install

```
pip install .
```

## Examples

```python
from sealkit.cidr import parse_cidr_string
from sealkit.iplist import append_ip_list

parse_cidr_string("192.168.1.3/24")          # '192.168.1.0/24'
append_ip_list(["10.0.0.1"], ["10.0.0.2", "10.0.0.1"])
# ['10.0.0.1', '10.0.0.2']
```

```python
from sealkit.sha256 import SHA256

fileobj, digest = SHA256().tar_check_sum("/abs/path/to/layer")
print(digest)                                # sha256:...
```

## Command line

```
seautil version           # full version information as JSON
seautil version --short   # only the version string
seautil --config my.yaml version
seautil route             # prints "route called"
seautil route add         # prints "add called"
seautil route del         # prints "del called"
```

Without `--config`, a `.seautil.json`, `.seautil.yaml` or `.seautil.yml`
file in the home directory is read if present.

## What it does not do

`seautil` has only the `version` and `route` commands, and `route add` /
`route del` only print a message: they do not change any routes. There are
no commands to apply or build clusters, generate certificates, push or pull
images, manage IPVS rules or run commands on remote hosts, and the package
has no SSH client.

## Tests

```
pip install .[test]
pytest
```