"""Running commands in the host's mount namespace from inside a container."""

from __future__ import annotations

import logging
import os
import posixpath
from typing import Callable, Dict, Optional, Sequence

from kubeutil.command import run_command

logger = logging.getLogger(__name__)

DEFAULT_HOST_ROOT_FS_PATH = "/rootfs"
"""Where the host's filesystem is mounted into the container."""

_MOUNT_NS_PATH = "/proc/1/ns/mnt"
_NSENTER = "nsenter"
_SEARCH_DIRS = ("/", "/bin", "/usr/sbin", "/usr/bin")
_BINARIES = (
    "mount",
    "findmnt",
    "umount",
    "systemd-run",
    "stat",
    "touch",
    "mkdir",
    "sh",
    "chmod",
    "realpath",
)
_OPTIONAL_BINARIES = frozenset({"systemd-run"})

Runner = Callable[[Sequence[str]], str]


def _join(*parts: str) -> str:
    """Join path parts with "/" and clean the result; empty parts are skipped."""
    joined = "/".join(part for part in parts if part)
    if not joined:
        return ""
    cleaned = posixpath.normpath(joined)
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


class NSEnter:
    """Wraps commands with ``nsenter`` so they run in the host mount namespace.

    ``runner`` takes a full argument list and returns the combined output,
    raising CommandError (or OSError) on failure.
    """

    def __init__(self, host_root_fs_path: str, runner: Runner = run_command) -> None:
        self.host_root_fs_path = host_root_fs_path
        self._runner = runner
        self._paths: Dict[str, str] = self._find_binaries()

    def _find_binaries(self) -> Dict[str, str]:
        paths: Dict[str, str] = {}
        for binary in _BINARIES:
            for directory in _SEARCH_DIRS:
                bin_path = _join(directory, binary)
                if os.path.exists(_join(self.host_root_fs_path, bin_path)):
                    paths[binary] = bin_path
                    break
            if binary not in paths and binary not in _OPTIONAL_BINARIES:
                raise FileNotFoundError(f"unable to find {binary}")
        return paths

    def full_command(self, cmd: str, args: Sequence[str] = ()) -> list:
        """Return the nsenter argument list that runs ``cmd`` on the host."""
        mount_ns = _join(self.host_root_fs_path, _MOUNT_NS_PATH)
        return [_NSENTER, f"--mount={mount_ns}", "--", self.abs_host_path(cmd), *args]

    def exec(self, cmd: str, args: Sequence[str] = ()) -> str:
        """Run ``cmd`` in the host mount namespace and return its combined output."""
        argv = self.full_command(cmd, args)
        logger.debug("Running nsenter command: %s", argv)
        return self._runner(argv)

    def command(self, cmd: str, *args: str) -> str:
        """Run ``cmd`` with ``args`` in the host mount namespace."""
        return self.exec(cmd, args)

    def abs_host_path(self, command: str) -> str:
        """Return the host path of ``command``, or ``command`` if it is unknown."""
        return self._paths.get(command, command)

    def supports_systemd(self) -> Optional[str]:
        """Return the host path of systemd-run, or None if it is not installed."""
        return self._paths.get("systemd-run") or None

    def eval_symlinks(self, pathname: str, must_exist: bool) -> str:
        """Resolve symlinks in ``pathname`` on the host.

        With ``must_exist`` every component must exist; otherwise the existing
        part is resolved and the rest appended as is.
        """
        args = ["-e" if must_exist else "-m", pathname]
        try:
            out = self.exec("realpath", args)
        except Exception as err:
            logger.info("failed to resolve symbolic links on %s: %s", pathname, err)
            raise
        return out.strip()

    def kubelet_path(self, pathname: str) -> str:
        """Return where the host path ``pathname`` is visible in the container."""
        return _join(self.host_root_fs_path, pathname)


def new_fake_nsenter(rootfs_path: str) -> NSEnter:
    """Return an NSEnter that runs commands directly in the current namespace.

    ``rootfs_path`` gets links to the local bin directories so that binaries
    are found; the commands themselves run without nsenter.
    """
    os.symlink("/bin", os.path.join(rootfs_path, "bin"))
    usr = os.path.join(rootfs_path, "usr")
    os.mkdir(usr, 0o755)
    os.symlink("/usr/bin", os.path.join(usr, "bin"))
    os.symlink("/usr/sbin", os.path.join(usr, "sbin"))

    def runner(argv: Sequence[str]) -> str:
        # Drop "nsenter --mount=... --" and run the real command.
        return run_command(list(argv)[3:])

    return NSEnter(rootfs_path, runner)