#!/usr/bin/env python3
"""
Demo: Widget listing with renamed keys, nullable fields and times.

This demonstrates reading a document with:
- A collection of objects
- Source keys that differ from result names (widgetType -> kind)
- Nullable fields and a nested object
- ISO-8601 times converted to datetimes
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import structured_reader
from structured_reader.validation import format_validation_errors


def widget(w):
    w.string("kind", key="widgetType")
    w.number("price")
    w.string("description", nullable=True)
    w.array("tags", of="string")
    w.object("dimensions", lambda d: d.number("weight").number("width").number("height"), nullable=True)
    w.time("last_updated_at", key="lastUpdated")


def listing(o):
    o.collection("widgets", widget)
    o.object("pagination", lambda p: p.string("next_url", key="nextUrl", nullable=True).number("total_items", key="totalItems"))


DOCUMENT = """
{
  "widgets": [
    {
      "widgetType": "squorzit",
      "price": 99.99,
      "description": "who can even say?",
      "tags": ["mysterious", "magical"],
      "dimensions": {"weight": 10, "width": 5, "height": 9001},
      "lastUpdated": "2017-12-24T01:01:00-08:00"
    },
    {
      "widgetType": "frobulator",
      "price": 0.79,
      "tags": [],
      "lastUpdated": "2017-12-24T01:05:00-08:00"
    }
  ],
  "pagination": {"nextUrl": null, "totalItems": 2}
}
"""

BROKEN = {
    "widgets": [
        {"widgetType": "frobulator", "price": "0.79", "tags": [123, {"foo": "bar"}], "lastUpdated": None}
    ],
    "pagination": {"nextUrl": None, "totalItems": 1},
}


def main():
    print("=" * 60)
    print("structured-reader Demo: Widget Listing")
    print("=" * 60)

    reader = structured_reader.json(listing)

    result = reader.read(DOCUMENT)

    print(f"\nWidgets: {len(result.widgets)}")
    for widget_record in result.widgets:
        print(f"  {widget_record.kind}: {widget_record.price} (tags: {', '.join(widget_record.tags) or 'none'})")
        print(f"    updated {widget_record.last_updated_at.isoformat()}")
    print(f"  Height of the first: {result.widgets[0].dimensions.height}")

    print("\n" + "=" * 60)
    print("Validating a broken document...")
    print("=" * 60)

    validation = reader.validate(BROKEN)
    print(f"Valid: {'✓' if validation.is_valid else '✗'} {validation.is_valid}")
    print(format_validation_errors(validation.errors))

    print("\n" + "=" * 60)
    print("Demo Complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
