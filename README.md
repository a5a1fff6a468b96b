# kubeutil

Small, dependency-free utilities for cluster and networking tooling.

## Modules

- `kubeutil.netparse`: `parse_ip_sloppy(text)` parses an IP address and
  allows leading zeros in IPv4 numbers; it returns `None` for invalid input
  and gives IPv4-mapped IPv6 addresses back as IPv4 addresses.
  `parse_cidr_sloppy(text)` returns `(address, network)` and raises
  `ValueError` on bad input.
- `kubeutil.ipnet`: `IPNetSet` and `IPSet`, sets keyed by the string form of
  their members, with `insert`, `delete`, `has`, `has_all`, `difference`,
  `string_slice`, `is_superset`, `in`, `len`, iteration and `==`.
  `parse_ip_nets(*specs)` and `parse_ip_set(*items)` build them from strings.
  In an `IPSet`, an IPv4-mapped IPv6 address equals its IPv4 form.
- `kubeutil.netutil`: `parse_cidrs`, the dual-stack checks
  (`is_dual_stack_ips`, `is_dual_stack_ip_strings`, `is_dual_stack_cidrs`,
  `is_dual_stack_cidr_strings`), the family tests (`is_ipv4`, `is_ipv6` and
  their `_string`, `_cidr` and `_cidr_string` forms), `parse_port(port,
  allow_zero)`, `big_for_ip`, `add_ip_offset`, `range_size` and
  `get_indexed_ip`.
- `kubeutil.port`: `LocalPort` (a dataclass validated on creation, with
  `IPFamily` and `Protocol` enums), `open_local_port(lp)` and
  `ListenPortOpener().open_local_port(lp)`, which bind a TCP or UDP socket
  and return it; close the socket to release the port.
- `kubeutil.command`: `run_command(argv)` runs a program and returns its
  stdout and stderr combined, raising `CommandError` (with `status` and
  `output`) on a non-zero exit.
- `kubeutil.ebtables`: `Ebtables(runner=run_command)` with `get_version`,
  `ensure_rule`, `delete_rule`, `ensure_chain`, `delete_chain` and
  `flush_chain`; the enums `RulePosition`, `Table` and `Chain`;
  `check_if_rule_exists`. Failures raise `EbtablesError`. Rules are matched
  textually against the `ebtables -L` listing, so rule arguments must be
  given in the same form and order as that listing shows them.
- `kubeutil.nsenter`: `NSEnter(host_root_fs_path, runner=run_command)` finds
  the host's `mount`, `findmnt`, `realpath` and similar binaries under the
  host root (raising `FileNotFoundError` if a required one is missing) and
  runs commands through `nsenter --mount=...`. It offers `full_command`,
  `exec`, `command`, `abs_host_path`, `supports_systemd` (the host path of
  `systemd-run`, or `None`), `eval_symlinks` and `kubelet_path`.
  `new_fake_nsenter(rootfs_path)` returns one that runs commands directly.
- `kubeutil.pathutil`: `exists(LinkTreatment, filename)` and
  `read_dir_no_stat(dirname)`.
- `kubeutil.trace`: `Trace` and `Field`, plus `use_trace`, `current_trace`
  and `nest_current` for carrying a trace through a context.
- `kubeutil.qualnames`: `escape_qualified_name`, `unescape_qualified_name`,
  `split_qualified_name`, `join_qualified_name` and `shorten_string`.
- `kubeutil.line_delimiter`: `LineDelimiter`, which buffers text and on
  `flush` writes each line wrapped in a delimiter.
- `kubeutil.slices`: `equal`, `filter_strings`, `contains`, `index`, `clone`.
- `kubeutil.optional`: `deref`, `optional_equal` and
  `all_optional_fields_none` for dataclasses.
- `kubeutil.temp`: the `Directory` base class, `TempDir` and
  `create_temp_dir(prefix)`.
- `kubeutil.temptest`: `FakeDir` and `FakeFile`, in-memory stand-ins for
  tests.

## Installation

```
pip install kubeutil
```

## Examples

```python
from kubeutil.ipnet import parse_ip_set
from kubeutil.netutil import is_dual_stack_ip_strings, get_indexed_ip
from kubeutil.netparse import parse_cidr_sloppy

ips = parse_ip_set("1.0.0.0", "::ffff:4.0.0.0")
print(sorted(ips.string_slice()))          # ['1.0.0.0', '4.0.0.0']

print(is_dual_stack_ip_strings(["1.1.1.1", "2001:db8::5"]))  # True

_, subnet = parse_cidr_sloppy("192.168.1.0/24")
print(get_indexed_ip(subnet, 20))          # 192.168.1.20
```

Tracing slow operations:

```python
from kubeutil.trace import Trace, Field

trace = Trace("list pods", Field("namespace", "default"))
trace.step("fetched from cache")
trace.step("filtered")
trace.log_if_long(0.5)   # logs only if the whole trace took 500 ms or more
```

Traces are written with the standard `logging` module at INFO level on the
`kubeutil.trace` logger. When DEBUG is enabled on that logger, every step
and nested trace is written, not only those over their share of the
threshold.

Writing to a temporary directory:

```python
from kubeutil.temp import create_temp_dir

directory = create_temp_dir("work")
with directory.new_file("data.txt") as handle:
    handle.write(b"hello")
directory.delete()
```

## What this package does not do

It is a library only: it installs no command-line program. `Ebtables` and
`NSEnter` start the `ebtables` and `nsenter` programs, which must be
installed and usually need root privileges; the package does not manage
firewall rules or namespaces on its own.

## Running the tests

```
pip install -e ".[test]"
pytest
```