#!/usr/bin/env python3
"""
Example usage of the TOON Transformer.

This script encodes a small dataset as TOON, decodes it back, and shows
the XML and CSV bridges along with the size saving over JSON.
"""

import json

from toon_transformer import ToonTransformer
from toon_transformer.options import Delimiter, ToonOptions


def main():
    """Main example function."""
    print("TOON Transformer Example")
    print("=" * 50)

    # Create sample data
    sample_data = {
        "project": "inventory",
        "tags": ["warehouse", "q3"],
        "items": [
            {"sku": "A1", "qty": 2, "price": 9.99},
            {"sku": "B2", "qty": 1, "price": 14.5},
            {"sku": "C3", "qty": 12, "price": 0.75}
        ],
        "locations": [
            {"name": "North", "bins": [1, 2, 3]},
            {"name": "South", "manager": {"name": "Bob", "phone": "555-0100"}}
        ]
    }

    transformer = ToonTransformer()

    print("\n📝 TOON encoding:")
    toon = transformer.encode(sample_data)
    print(toon)

    decoded = transformer.decode(toon)
    print(f"\n🔁 Round trip matches: {decoded == sample_data}")

    print(f"\n📊 {transformer.estimate_savings(sample_data)}")

    print("\n📝 Tab-delimited with length markers:")
    tab_transformer = ToonTransformer(ToonOptions(delimiter=Delimiter.TAB, length_marker=True))
    print(tab_transformer.encode({"items": sample_data["items"]}))

    print("\n📄 CSV from the items table:")
    print(transformer.to_csv(transformer.encode({"items": sample_data["items"]})))

    print("📄 XML from TOON:")
    print(transformer.to_xml(transformer.encode({"project": sample_data["project"],
                                                 "tags": sample_data["tags"]})))

    print("\n🧾 Lenient decoding of a damaged document:")
    lenient = ToonTransformer(ToonOptions(strict=False))
    result = lenient.decode_with_report("items[3]{qty,sku}:\n2,A1\n1,B2")
    print(json.dumps(result.value, indent=2))
    for warning in result.warnings:
        print(f"   ⚠️  {warning.message} ({warning.location})")


if __name__ == "__main__":
    main()
