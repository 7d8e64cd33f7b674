#!/usr/bin/env python3
"""
Demo: Selecting values by path.

Patterns are shell-style globs over rendered paths (".widgets[0].price").
Brackets are matched literally, so "[*]" means "any index".
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import structured_reader


def listing(o):
    o.collection("widgets", lambda w: w.string("kind", key="widgetType").number("price"))


DOCUMENT = {
    "widgets": [
        {"widgetType": "squorzit", "price": "free"},
        {"widgetType": "frobulator", "price": 0.79},
    ]
}


def main():
    print("=" * 60)
    print("structured-reader Demo: Selection")
    print("=" * 60)

    reader = structured_reader.json(listing)

    # The first price is invalid, so it is skipped
    for pattern in (".widgets[*].price", ".widgets[0].widgetType", ".widgets[1]", ".missing"):
        print(f"  {pattern!r:28} -> {reader.select(DOCUMENT, pattern, default='(no match)')}")

    print("\n" + "=" * 60)
    print("Demo Complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
