#!/usr/bin/env python3
"""
Smoke test for safe file system operations.

This script performs basic smoke tests to ensure the file and directory
managers work on the current interpreter.
"""

import asyncio
import os
import shutil
import sys
import tempfile

from safefs import DirectoryManager, FileManager, NonExistentError, detect_capabilities


async def smoke_test():
    """Run basic smoke tests for the file system components."""
    print("Running file system smoke tests...")
    print(f"Runtime capabilities: {detect_capabilities()}")

    # Use a temporary directory for testing
    temp_dir = tempfile.mkdtemp(prefix="safefs_smoke_test_")
    print(f"Using temporary directory: {temp_dir}")

    try:
        # Test FileManager
        print("\n1. Testing FileManager...")
        fm = FileManager()
        path = os.path.join(temp_dir, "test.txt")

        await fm.delete_file(path)
        assert not await fm.is_present(path), "Missing file reported as present"

        await fm.write_file(path, "Hello, World!")
        content = await fm.read_file(path)
        assert content == "Hello, World!", f"Expected 'Hello, World!', got {repr(content)}"

        await fm.delete_file(path)
        await fm.delete_file(path)
        assert not await fm.is_present(path), "File still present after delete"

        try:
            await fm.read_file(path)
        except NonExistentError as e:
            assert e.path == path, f"Unexpected error path: {e.path}"
        else:
            raise AssertionError("Reading a deleted file did not fail")

        print("   ✓ FileManager basic operations work")

        # Test DirectoryManager
        print("\n2. Testing DirectoryManager...")
        dm = DirectoryManager(file_manager=fm)
        root = os.path.join(temp_dir, "tree")

        await dm.make_directory_recursive(os.path.join(root, "a", "b"))
        await fm.write_file(os.path.join(root, "a", "b", "c.txt"), "content")
        entries = await dm.read_entire_directory(root)
        assert entries == ["a", "a/b", "a/b/c.txt"], f"Unexpected listing: {entries}"

        await dm.remove_directory_recursive(root)
        await dm.remove_directory_recursive(root)
        assert not await fm.is_present(root), "Directory still present after removal"

        print("   ✓ DirectoryManager basic operations work")

        print("\n✅ All smoke tests passed!")
        return True

    except Exception as e:
        print(f"\n❌ Smoke test failed: {e}")
        return False

    finally:
        shutil.rmtree(temp_dir, ignore_errors=True)
        print(f"Cleaned up temporary directory: {temp_dir}")


async def main():
    """Run smoke tests."""
    success = await smoke_test()
    if success:
        print("\n🎉 Safe file system operations are working correctly!")
        sys.exit(0)
    else:
        print("\n💥 Safe file system operations have issues!")
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
