#!/usr/bin/env python3
"""
Example usage of the JSON value library.

This script demonstrates building a document with auto-vivifying access,
the lossy conversions, pretty and minified output, and parsing text back
including how failures are reported.
"""

import tempfile
from pathlib import Path
from src.json_value import JSONCodec, JSONValue, new_array, parse


def main():
    """Main example function."""
    print("JSON Value Example")
    print("=" * 50)

    # Build a document by assigning through nested slots
    doc = JSONValue()
    doc["config"]["version"] = "1.0.0"
    doc["config"]["limits"]["max_posts_per_user"] = 100
    doc["config"]["features"]["private_messaging"] = False
    doc["posts"] = new_array(
        {"id": 1, "author": "user_001", "title": "My First Post", "tags": ["introduction", "hello"]},
        {"id": 2, "author": "user_002", "title": "Learning Python", "tags": ["python", "programming"]},
    )
    doc["users"]["user_001"] = JSONValue.from_pairs(
        "name", "Alice Johnson",
        "age", 30,
        "rating", 4.75,
    )
    doc["posts"][1]["tags"].append("learning")

    print("Pretty form:")
    print(doc.dump())
    print(f"\nMinified form ({len(doc.dump_minified())} characters):")
    print(doc.dump_minified())

    # Conversions never raise; the checked forms report success
    print("\nConversions:")
    alice = doc["users"]["user_001"]
    print(f"   age as float:    {alice.at('age').to_float()}")
    print(f"   rating as int:   {alice.at('rating').to_int()}")
    print(f"   '42abc' as int:  {JSONValue('42abc').to_int_checked()}")
    print(f"   'maybe' as bool: {JSONValue('maybe').to_bool_checked()}")

    # Parse text back and compare
    value, ok = parse(doc.dump())
    print(f"\nRound trip: ok={ok}, equal={value == doc}")

    # Malformed input produces diagnostics instead of exceptions
    codec = JSONCodec()
    result = codec.loads('{\n  "posts": [1, 2,\n}')
    if not result.ok:
        print("\n❌ Failed to parse broken text")
        for error in result.errors:
            print(f"   Error: {error}")

    # Save and reload through the file helpers
    with tempfile.TemporaryDirectory() as temp_dir:
        path = Path(temp_dir) / "doc.json"
        info = codec.save_file(path, doc)
        print(f"\n✅ Saved {info['size']} bytes to {path.name}")

        loaded = codec.load_file(path)
        print(f"   Reloaded {loaded.value.json_type().value}, "
              f"title of post 2: {codec.lookup(loaded.value, 'posts.1.title').to_unescaped_string()}")

        stats = codec.get_structure_statistics(loaded.value)
        print(f"   Depth {stats['max_depth']}, {stats['object_count']} objects, "
              f"{stats['array_count']} arrays, {stats['scalar_count']} scalars")


if __name__ == "__main__":
    main()
