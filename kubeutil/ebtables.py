"""Control of the ebtables bridging firewall through its command line."""

from __future__ import annotations

import re
from enum import Enum
from typing import Callable, List, Sequence, Union

from kubeutil.command import CommandError, run_command

_CMD = "ebtables"
# Show full MAC addresses; the default output drops leading zeroes.
_FULL_MAC = "--Lmac2"

_OP_CREATE_CHAIN = "-N"
_OP_FLUSH_CHAIN = "-F"
_OP_DELETE_CHAIN = "-X"
_OP_LIST_CHAIN = "-L"
_OP_DELETE_RULE = "-D"

_VERSION_RE = re.compile(r"v([0-9]+\.[0-9]+\.[0-9]+)")


class RulePosition(str, Enum):
    """Where a new rule goes within a chain."""

    PREPEND = "-I"
    APPEND = "-A"

    def __str__(self) -> str:
        return self.value


class Table(str, Enum):
    """Tables that ebtables has by default."""

    NAT = "nat"
    FILTER = "filter"
    BROUTE = "broute"

    def __str__(self) -> str:
        return self.value


class Chain(str, Enum):
    """Chains built into ebtables."""

    POSTROUTING = "POSTROUTING"
    PREROUTING = "PREROUTING"
    OUTPUT = "OUTPUT"
    INPUT = "INPUT"
    BROUTING = "BROUTING"

    def __str__(self) -> str:
        return self.value


class EbtablesError(Exception):
    """An ebtables command failed."""


Runner = Callable[[Sequence[str]], str]


def _text(value: Union[Enum, str]) -> str:
    return value.value if isinstance(value, Enum) else str(value)


def _full_args(table, op: str, chain, *args: str) -> List[str]:
    return ["-t", _text(table), op, _text(chain), *args]


def check_if_rule_exists(list_chain_output: str, *args: str) -> bool:
    """Return True if a line of the chain listing equals the rule ``args``.

    The arguments must follow the format and order of the ebtables listing.
    """
    rule = " ".join(args)
    return any(line.strip() == rule for line in list_chain_output.split("\n"))


class Ebtables:
    """Runs ebtables commands through ``runner``.

    ``runner`` takes the full argument list and returns the combined output,
    raising CommandError (or OSError) on failure.
    """

    def __init__(self, runner: Runner = run_command) -> None:
        self._runner = runner

    def _run(self, args: Sequence[str]) -> str:
        return self._runner([_CMD, *args]) or ""

    def _try(self, args: Sequence[str], message: str) -> str:
        try:
            return self._run(args)
        except CommandError as err:
            raise EbtablesError(f"{message}: {err}, output: {err.output}") from err
        except OSError as err:
            raise EbtablesError(f"{message}: {err}, output: ") from err

    def _rule_exists(self, table, chain, args: Sequence[str]) -> bool:
        try:
            out = self._run(_full_args(table, _OP_LIST_CHAIN, chain, _FULL_MAC))
        except (CommandError, OSError):
            return False
        return check_if_rule_exists(out, *args)

    def get_version(self) -> str:
        """Return the "X.Y.Z" version string of ebtables."""
        try:
            out = self._run(["--version"])
        except CommandError as err:
            raise EbtablesError(str(err)) from err
        match = _VERSION_RE.search(out)
        if match is None:
            raise EbtablesError(f"no ebtables version found in string: {out}")
        return match.group(1)

    def ensure_rule(self, position, table, chain, *args: str) -> bool:
        """Create the rule unless present; return True if it already existed.

        Rules are matched textually against the chain listing.
        """
        if self._rule_exists(table, chain, args):
            return True
        self._try(_full_args(table, _text(position), chain, *args), "Failed to ensure rule")
        return False

    def delete_rule(self, table, chain, *args: str) -> None:
        """Delete the rule if it is present."""
        if not self._rule_exists(table, chain, args):
            return
        self._try(_full_args(table, _OP_DELETE_RULE, chain, *args), "Failed to delete rule")

    def ensure_chain(self, table, chain) -> bool:
        """Create the chain unless present; return True if it already existed."""
        try:
            self._run(_full_args(table, _OP_LIST_CHAIN, chain))
            return True
        except (CommandError, OSError):
            pass
        self._try(
            _full_args(table, _OP_CREATE_CHAIN, chain),
            f"Failed to ensure {_text(chain)} chain",
        )
        return False

    def delete_chain(self, table, chain) -> None:
        """Delete the chain; raises EbtablesError if that fails."""
        self._try(
            _full_args(table, _OP_DELETE_CHAIN, chain),
            f"Failed to delete {_text(table)} chain {_text(chain)}",
        )

    def flush_chain(self, table, chain) -> None:
        """Flush the chain; raises EbtablesError if that fails."""
        self._try(
            _full_args(table, _OP_FLUSH_CHAIN, chain),
            f"Failed to flush {_text(table)} chain {_text(chain)}",
        )