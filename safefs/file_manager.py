"""
Safe file operations.

Each operation runs the same protocol: check existence, check permission,
then perform the raw call, raising a classified error at whichever step
fails. The underlying error is always kept as ``__cause__``.
"""

import logging
import os
from typing import List, Optional, Union

from . import primitives
from .config import FileSystemConfig
from .exceptions import (
    AccessDeniedError,
    ErrorKind,
    NonExistentError,
    OperationFailedError,
    PrimitiveError,
    is_not_found,
)
from .primitives import AccessMode, PathType

logger = logging.getLogger(__name__)


class FileManager:
    """
    Pre-checked read, write, delete and list operations on single paths.

    Permission and existence checks happen before the raw operation so a
    caller can tell "did not exist" from "not permitted" from "failed anyway".
    The checks are not atomic with the operation; a race between them is
    caught by the raw call and reported as the ``*_FAILED`` kind.
    """

    def __init__(self, config: Optional[FileSystemConfig] = None):
        self.config = config or FileSystemConfig()

    # Access checks

    async def exists(self, path: PathType) -> None:
        await primitives.check_access(path, AccessMode.EXISTS)

    async def readable(self, path: PathType) -> None:
        await primitives.check_access(path, AccessMode.READABLE)

    async def writable(self, path: PathType) -> None:
        await primitives.check_access(path, AccessMode.WRITABLE)

    async def executable(self, path: PathType) -> None:
        await primitives.check_access(path, AccessMode.EXECUTABLE)

    async def is_present(self, path: PathType) -> bool:
        return await self._passes(path, AccessMode.EXISTS)

    async def is_readable(self, path: PathType) -> bool:
        return await self._passes(path, AccessMode.READABLE)

    async def is_writable(self, path: PathType) -> bool:
        return await self._passes(path, AccessMode.WRITABLE)

    async def is_executable(self, path: PathType) -> bool:
        return await self._passes(path, AccessMode.EXECUTABLE)

    async def _passes(self, path: PathType, mode: AccessMode) -> bool:
        try:
            await primitives.check_access(path, mode)
        except OSError:
            return False
        return True

    # Files

    async def read_file(self, path: PathType) -> str:
        """
        Read a text file.

        Args:
            path: File to read

        Returns:
            File contents decoded with the configured encoding

        Raises:
            NonExistentError: If the file does not exist
            AccessDeniedError: If the file is not readable
            OperationFailedError: If the read itself fails
        """
        name = os.fspath(path)

        try:
            await self.exists(path)
        except OSError as e:
            raise NonExistentError(
                ErrorKind.NON_EXISTENT_READ, name, "read file",
                f"unable to read the non-existent file: {name}",
            ) from e

        try:
            await self.readable(path)
        except OSError as e:
            raise AccessDeniedError(
                ErrorKind.PERMISSION_READ, name, "read file",
                f"no read permission for the existing file: {name}",
            ) from e

        try:
            contents = await primitives.read_file_raw(path, self.config.encoding)
        except PrimitiveError as e:
            raise OperationFailedError(
                ErrorKind.READ_FAILED, name, "read file",
                f"failed to read the existing and readable file: {name}",
            ) from e

        logger.debug(f"Read file: {name}")
        return contents

    async def write_file(self, path: PathType, contents: Union[str, bytes],
                         mode: Optional[int] = None) -> None:
        """
        Write contents to a file, creating it if needed.

        Unlike ``read_file`` a missing file is not an error here: the write
        is attempted directly and only its failure is reported.

        Args:
            path: File to write
            contents: Text or bytes to write
            mode: Permission bits for a newly created file

        Raises:
            NonExistentError: If creating the missing file fails
            AccessDeniedError: If the existing file is not writable
            OperationFailedError: If writing the existing file fails
        """
        name = os.fspath(path)

        try:
            await self.exists(path)
        except OSError:
            try:
                await primitives.write_file_raw(path, contents, mode, self.config.encoding)
            except PrimitiveError as e:
                raise NonExistentError(
                    ErrorKind.NON_EXISTENT_WRITE, name, "write file",
                    f"failed to write the non-existent file: {name}",
                ) from e
            logger.debug(f"Created file: {name}")
            return

        try:
            await self.writable(path)
        except OSError as e:
            raise AccessDeniedError(
                ErrorKind.PERMISSION_WRITE, name, "write file",
                f"no write permission for the existing file: {name}",
            ) from e

        try:
            await primitives.write_file_raw(path, contents, mode, self.config.encoding)
        except PrimitiveError as e:
            raise OperationFailedError(
                ErrorKind.WRITE_FAILED, name, "write file",
                f"failed to write the existing and writable file: {name}",
            ) from e

        logger.debug(f"Wrote file: {name}")

    async def delete_file(self, path: PathType) -> None:
        """
        Delete a file if it exists.

        Deleting a missing file succeeds, including when the file vanishes
        between the checks and the unlink. Only a not-found signal is
        tolerated; every other failure is raised.

        Raises:
            AccessDeniedError: If the existing file is not writable
            OperationFailedError: If the unlink fails
        """
        name = os.fspath(path)

        try:
            await self.exists(path)
        except OSError:
            return

        try:
            await self.writable(path)
        except OSError as e:
            if is_not_found(e):
                logger.warning(f"File disappeared before delete: {name}")
                return
            raise AccessDeniedError(
                ErrorKind.PERMISSION_DELETE, name, "delete file",
                f"no write permission to delete the existing file: {name}",
            ) from e

        try:
            await primitives.remove_file_raw(path)
        except PrimitiveError as e:
            if is_not_found(e):
                logger.warning(f"File disappeared during delete: {name}")
                return
            raise OperationFailedError(
                ErrorKind.DELETE_FAILED, name, "delete file",
                f"failed to delete the existing and writable file: {name}",
            ) from e

        logger.info(f"Deleted file: {name}")

    # Directories

    async def read_directory(self, path: PathType) -> List[str]:
        """
        List the names directly inside a directory.

        Returns:
            Sorted entry names

        Raises:
            NonExistentError: If the directory does not exist
            AccessDeniedError: If the directory is not readable
            OperationFailedError: If the listing fails
        """
        name = os.fspath(path)

        try:
            await self.exists(path)
        except OSError as e:
            raise NonExistentError(
                ErrorKind.NON_EXISTENT_LIST, name, "read directory",
                f"unable to read the non-existent directory: {name}",
            ) from e

        try:
            await self.readable(path)
        except OSError as e:
            raise AccessDeniedError(
                ErrorKind.PERMISSION_LIST, name, "read directory",
                f"no read permission for the directory: {name}",
            ) from e

        try:
            entries = await primitives.list_directory_raw(path)
        except PrimitiveError as e:
            raise OperationFailedError(
                ErrorKind.LIST_FAILED, name, "read directory",
                f"failed to read the existing and readable directory: {name}",
            ) from e

        return sorted(entries)
