#!/usr/bin/env python3
"""
Demonstration of the safe file system operations.

This script shows how FileManager classifies failures and how
DirectoryManager runs the same recursive operations under different
runtime capabilities.
"""

import asyncio
import os
import shutil
import tempfile

from safefs import (
    DirectoryManager,
    FileManager,
    RuntimeCapabilities,
    SafeOperationError,
    detect_capabilities,
)


async def demo_file_manager():
    """Demonstrate FileManager capabilities."""
    print("=== FileManager Demo ===")

    # Use a temporary directory for demo
    temp_dir = tempfile.mkdtemp(prefix="safefs_demo_")
    print(f"Using temporary directory: {temp_dir}")

    try:
        fm = FileManager()
        notes = os.path.join(temp_dir, "notes.txt")

        print("\n1. Writing and reading text files:")
        await fm.write_file(notes, "Hello!\nThis is a test note.")
        content = await fm.read_file(notes)
        print(f"   Content: {repr(content)}")

        print("\n2. Access checks:")
        print(f"   present={await fm.is_present(notes)} readable={await fm.is_readable(notes)}"
              f" writable={await fm.is_writable(notes)} executable={await fm.is_executable(notes)}")

        print("\n3. Classified failures:")
        for operation in (
            fm.read_file(os.path.join(temp_dir, "missing.txt")),
            fm.write_file(os.path.join(temp_dir, "no", "parent.txt"), "x"),
            fm.read_directory(notes),
        ):
            try:
                await operation
            except SafeOperationError as e:
                print(f"   {e.kind.value}: {e} (cause: {e.__cause__!r})")

        print("\n4. Idempotent delete:")
        await fm.delete_file(notes)
        await fm.delete_file(notes)
        print(f"   present after two deletes: {await fm.is_present(notes)}")

    finally:
        shutil.rmtree(temp_dir, ignore_errors=True)
        print(f"\nCleaned up temporary directory: {temp_dir}")


async def demo_directory_manager():
    """Demonstrate DirectoryManager under several runtimes."""
    print("\n=== DirectoryManager Demo ===")

    temp_dir = tempfile.mkdtemp(prefix="safefs_demo_")

    try:
        runtimes = [detect_capabilities(), RuntimeCapabilities.from_string("3.11"),
                    RuntimeCapabilities.from_string("2.7")]

        for capabilities in runtimes:
            dm = DirectoryManager(capabilities=capabilities)
            root = os.path.join(temp_dir, f"tree-{capabilities}")

            await dm.make_directory_recursive(os.path.join(root, "nested", "directory"))
            await dm.file_manager.write_file(os.path.join(root, "nested", "directory", "file.txt"), "abc")
            entries = await dm.read_entire_directory(root)
            await dm.remove_directory_recursive(root)

            print(f"   runtime {capabilities}: {entries}")

    finally:
        shutil.rmtree(temp_dir, ignore_errors=True)


async def main():
    """Run all demonstrations."""
    print("Safe File System Demo")
    print("=" * 40)

    await demo_file_manager()
    await demo_directory_manager()

    print("\n" + "=" * 40)
    print("Demo completed successfully!")


if __name__ == "__main__":
    asyncio.run(main())
