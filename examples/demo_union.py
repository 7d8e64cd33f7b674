#!/usr/bin/env python3
"""
Demo: Discriminated union of shapes, with a custom reader type.

Each element of the array is tried against every shape and read by the
first one that matches. A custom "positive" type shows how reader sets
add new types.
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import structured_reader


def positive(fragment, traversal):
    if isinstance(fragment, (int, float)) and not isinstance(fragment, bool) and fragment > 0:
        return traversal.accept(fragment)
    return traversal.flunk(fragment, "expected a positive Number")


def types(r):
    r.custom("positive", positive)


def shape(s):
    s.object(lambda sq: sq.literal("type", value="square").positive("length"))
    s.object(lambda rc: rc.literal("type", value="rectangle").positive("width").positive("height"))
    s.object(lambda cr: cr.literal("type", value="circle").positive("diameter"))


DOCUMENT = [
    {"type": "square", "length": 10},
    {"type": "rectangle", "width": 5, "height": 10},
    {"type": "circle", "diameter": 4},
]


def main():
    print("=" * 60)
    print("structured-reader Demo: Shapes")
    print("=" * 60)

    reader = structured_reader.json(
        lambda a: a.one_of(shape),
        root="array",
        reader_set=structured_reader.reader_set(types),
    )

    for item in reader.read(DOCUMENT):
        print(f"  {item}")

    print("\nA circle with a negative diameter:")
    result = reader.validate(DOCUMENT + [{"type": "circle", "diameter": -1}])
    for error in result.errors:
        print(f"  At {error.path}: {error.reason}")

    print("\n" + "=" * 60)
    print("Demo Complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
