"""
Recursive directory creation, removal and listing.

Each operation picks an implementation from the runtime capabilities it was
given. Every implementation honours the same contract, so callers cannot
tell which one ran.
"""

import asyncio
import errno
import logging
import os
import shutil
import time
from functools import partial
from typing import Callable, List, Optional

import aiofiles.os

from .capabilities import (
    ListStrategy,
    MkdirStrategy,
    RemoveStrategy,
    RuntimeCapabilities,
    detect_capabilities,
    select_list_strategy,
    select_mkdir_strategy,
    select_remove_strategy,
)
from .config import FileSystemConfig
from .exceptions import (
    AccessDeniedError,
    ErrorKind,
    NonExistentError,
    OperationFailedError,
    RootDeletionRefusedError,
    ShellCommandError,
    is_not_found,
)
from .file_manager import FileManager
from .primitives import PathType
from .shell import quote, run_shell

logger = logging.getLogger(__name__)

# Transient errors worth retrying during removal
RETRYABLE_ERRNOS = frozenset({
    errno.EBUSY,
    errno.EMFILE,
    errno.ENFILE,
    errno.ENOTEMPTY,
    errno.EPERM,
})

# Calls the retry hook may repeat with just a path
RETRYABLE_FUNCS = (os.unlink, os.remove, os.rmdir)


def is_root_path(path: str) -> bool:
    """True for the filesystem root, or a drive root on Windows."""
    return os.path.dirname(path) == path


def _raise(error: OSError) -> None:
    raise error


def _retrying_handler(max_retries: int, delay: float) -> Callable:
    """
    Build an ``onexc``-style handler that retries the failed call.

    Missing paths are ignored. Transient errors from an unlink or rmdir are
    retried up to ``max_retries`` times, ``delay`` seconds apart; anything
    else is raised.
    """
    def handler(func, path, exc):
        if is_not_found(exc):
            return
        if func not in RETRYABLE_FUNCS:
            raise exc
        for _ in range(max_retries):
            if not isinstance(exc, OSError) or exc.errno not in RETRYABLE_ERRNOS:
                break
            logger.warning(f"Retrying {getattr(func, '__name__', func)} on {path}: {exc}")
            time.sleep(delay)
            try:
                func(path)
                return
            except FileNotFoundError:
                return
            except OSError as e:
                exc = e
        raise exc

    return handler


def _force_remove(path: str, max_retries: int, delay: float) -> None:
    shutil.rmtree(path, onexc=_retrying_handler(max_retries, delay))


def _walk_remove(path: str, max_retries: int, delay: float) -> None:
    # Remove a link to a directory, never the tree behind it
    if os.path.islink(path):
        os.unlink(path)
        return

    handler = _retrying_handler(max_retries, delay)

    def remove(func, target):
        try:
            func(target)
        except OSError as e:
            handler(func, target, e)

    for root, dirs, files in os.walk(path, topdown=False, onerror=_raise):
        for name in files:
            remove(os.unlink, os.path.join(root, name))
        for name in dirs:
            target = os.path.join(root, name)
            remove(os.unlink if os.path.islink(target) else os.rmdir, target)
    remove(os.rmdir, path)


def _legacy_remove(path: str, max_busy_tries: int, delay: float) -> None:
    # Retries the whole removal rather than the single failed call
    for attempt in range(max_busy_tries + 1):
        try:
            shutil.rmtree(path)
            return
        except OSError as e:
            retryable = e.errno in RETRYABLE_ERRNOS or (
                is_not_found(e) and os.path.lexists(path)
            )
            if not retryable or attempt == max_busy_tries:
                raise
            logger.warning(f"Retrying removal of {path} after {e}")
            time.sleep(delay)


def _walk_list(root: str) -> List[str]:
    entries = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
        relative = os.path.relpath(dirpath, root)
        for name in dirnames + filenames:
            entry = name if relative == os.curdir else os.path.join(relative, name)
            entries.append(entry.replace(os.sep, "/"))
    return entries


def parse_listing(output: str) -> List[str]:
    """Turn newline-delimited ``find .`` output into relative entries."""
    entries = []
    for line in output.split("\n"):
        line = line.rstrip("\r")
        if line.startswith("./"):
            line = line[2:]
        if not line or line == ".":
            continue
        entries.append(line)
    return entries


class DirectoryManager:
    """
    Recursive directory operations with runtime-dependent implementations.

    The capabilities descriptor decides which implementation runs; pass a
    synthetic one to force an older strategy.
    """

    def __init__(self, file_manager: Optional[FileManager] = None,
                 capabilities: Optional[RuntimeCapabilities] = None,
                 config: Optional[FileSystemConfig] = None):
        """
        Initialize DirectoryManager.

        Args:
            file_manager: Manager used for the existence and permission checks
            capabilities: Runtime to select strategies for. Defaults to the
                running interpreter
            config: Retry and shell settings. Defaults to the file manager's
        """
        self.file_manager = file_manager or FileManager(config)
        self.config = config or self.file_manager.config
        self.capabilities = capabilities or detect_capabilities()

    async def _run_blocking(self, func, *args):
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, partial(func, *args))

    async def make_directory_recursive(self, path: PathType, mode: Optional[int] = None) -> None:
        """
        Create a directory and any missing parents.

        Does nothing if the path already exists.

        Args:
            path: Directory to create
            mode: Permission bits for created directories

        Raises:
            OperationFailedError: If a directory cannot be created
        """
        target = os.path.abspath(os.fspath(path))
        mode = self.config.directory_mode if mode is None else mode

        if await self.file_manager.is_present(target):
            return

        strategy = select_mkdir_strategy(self.capabilities)
        logger.debug(f"Creating directory {target} with {strategy.value} strategy")

        try:
            if strategy is MkdirStrategy.NATIVE:
                await aiofiles.os.makedirs(target, mode, exist_ok=True)
            else:
                await self._make_directory_manual(target, mode)
        except OSError as e:
            raise OperationFailedError(
                ErrorKind.MKDIR_FAILED, target, "make directory",
                f"failed to create the directory: {target}",
            ) from e

    async def _make_directory_manual(self, path: str, mode: int) -> None:
        if await self.file_manager.is_present(path):
            return
        parent = os.path.dirname(path)
        if parent and parent != path:
            await self._make_directory_manual(parent, mode)
        try:
            await aiofiles.os.mkdir(path, mode)
        except FileExistsError:
            pass

    async def remove_directory_recursive(self, path: PathType) -> None:
        """
        Remove a directory and everything inside it.

        Removing a missing directory succeeds, as does losing a race with
        another remover.

        Args:
            path: Directory to remove

        Raises:
            RootDeletionRefusedError: If the path is empty or the filesystem root
            AccessDeniedError: If the directory is not writable
            OperationFailedError: If the removal fails
        """
        raw = os.fspath(path)
        target = os.path.abspath(raw)

        if not raw.strip() or is_root_path(target):
            raise RootDeletionRefusedError(raw)

        try:
            await self.file_manager.exists(target)
        except OSError:
            return

        try:
            await self.file_manager.writable(target)
        except OSError as e:
            if is_not_found(e):
                return
            raise AccessDeniedError(
                ErrorKind.PERMISSION_DELETE, target, "remove directory",
                f"no write permission to remove the existing directory: {target}",
            ) from e

        strategy = select_remove_strategy(self.capabilities)
        logger.debug(f"Removing directory {target} with {strategy.value} strategy")

        try:
            await self._remove_with(strategy, target)
        except (OSError, ShellCommandError) as e:
            if is_not_found(e):
                return
            raise OperationFailedError(
                ErrorKind.DELETE_FAILED, target, "remove directory",
                f"failed to remove the existing and writable directory: {target}",
            ) from e

        logger.info(f"Removed directory: {target}")

    async def _remove_with(self, strategy: RemoveStrategy, target: str) -> None:
        retries, delay = self.config.max_retries, self.config.retry_delay

        # Only the link goes, whichever strategy was selected
        if await aiofiles.os.path.islink(target):
            await aiofiles.os.unlink(target)
            return

        if strategy is RemoveStrategy.FORCE:
            await self._run_blocking(_force_remove, target, retries, delay)
        elif strategy is RemoveStrategy.RECURSIVE:
            await self._run_blocking(_walk_remove, target, retries, delay)
        elif strategy is RemoveStrategy.LEGACY_RECURSIVE:
            await self._run_blocking(_legacy_remove, target, retries, delay)
        else:
            # Checked again here since this path hands the target to a shell
            if not target or is_root_path(target):
                raise RootDeletionRefusedError(target)
            await run_shell(
                f"rm -rf -- {quote(target)}",
                cwd=os.path.dirname(target),
                timeout=self.config.shell_timeout_seconds,
            )

    async def read_entire_directory(self, path: PathType) -> List[str]:
        """
        List every directory and file below a directory.

        Args:
            path: Directory to list

        Returns:
            Sorted paths relative to ``path``, separated by "/"

        Raises:
            NonExistentError: If the directory does not exist
            AccessDeniedError: If the directory is not readable
            OperationFailedError: If the listing fails
        """
        target = os.path.abspath(os.fspath(path))

        try:
            await self.file_manager.exists(target)
        except OSError as e:
            raise NonExistentError(
                ErrorKind.NON_EXISTENT_LIST, target, "read entire directory",
                f"unable to read the non-existent directory: {target}",
            ) from e

        try:
            await self.file_manager.readable(target)
        except OSError as e:
            raise AccessDeniedError(
                ErrorKind.PERMISSION_LIST, target, "read entire directory",
                f"no read permission for the directory: {target}",
            ) from e

        strategy = select_list_strategy(self.capabilities)
        logger.debug(f"Listing directory {target} with {strategy.value} strategy")

        try:
            if strategy is ListStrategy.NATIVE:
                entries = await self._run_blocking(_walk_list, target)
            else:
                result = await run_shell(
                    "find .", cwd=target, timeout=self.config.shell_timeout_seconds
                )
                entries = parse_listing(result.stdout)
        except (OSError, ShellCommandError) as e:
            raise OperationFailedError(
                ErrorKind.LIST_FAILED, target, "read entire directory",
                f"failed to read the existing and readable directory: {target}",
            ) from e

        return sorted(entries)
