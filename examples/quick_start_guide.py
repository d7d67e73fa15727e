#!/usr/bin/env python3
"""
Quick Start Guide for the Strict Markup Parser.

Walks through tokenizing, parsing, validating and re-serializing a small
document, and shows what the parser reports for malformed input.
"""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from strict_markup_parser import (
    ElementNode,
    MarkupError,
    MarkupParser,
    ParserConfig,
    parse,
    to_markup,
    tokenize,
    validate,
)

SAMPLE = '<div id="main">html 文本 <img src="./image.jpg" /></div>'


def quick_start_example():
    """Quick start example showing basic usage."""

    print("🚀 QUICK START - Strict Markup Parser")
    print("=" * 45)

    # Step 1: Tokens
    print("\n🔤 Step 1: Tokenizing")
    print("-" * 30)
    for token in tokenize(SAMPLE):
        print(f"  {token.type.name:<17} {token.to_dict()}")

    # Step 2: Tree
    print("\n🌳 Step 2: Building the Tree")
    print("-" * 30)
    nodes = parse(SAMPLE)
    div = nodes[0]
    print(f"✅ <{div.tag_name}> with attributes {div.attributes}")
    for child in div.children:
        if isinstance(child, ElementNode):
            print(f"  element <{child.tag_name}> {child.attributes}")
        else:
            print(f"  text {child.text!r}")

    # Step 3: Canonical markup
    print("\n📝 Step 3: Serializing")
    print("-" * 30)
    print(f"  {to_markup(nodes)}")

    # Step 4: Errors
    print("\n❌ Step 4: Rejected Input")
    print("-" * 30)
    for bad in ("<div>", "</div>", "< div>", "<div id=main>", "<a><b></a></b>"):
        try:
            parse(bad)
        except MarkupError as e:
            print(f"  {bad!r:<18} {e.kind.name}: {e}")


def configured_parser_example():
    """Configured parser with metrics and non-raising validation."""

    print("\n⚙️  CONFIGURED PARSER")
    print("=" * 45)

    parser = MarkupParser(ParserConfig(correlation_id="quick-start"))
    result = parser.parse_with_metrics(SAMPLE)
    metrics = result.performance
    print(f"✅ {result.element_count} elements, {result.text_count} text nodes")
    print(f"📏 Max depth: {metrics.max_depth}")
    print(f"⏱️  {metrics.processing_time_ms:.3f} ms for {metrics.characters_processed} chars")

    report = validate("<p>\n<b></p>")
    print(f"\n🔍 Valid: {report.success}")
    for diagnostic in report.diagnostics:
        print(f"  - {diagnostic.severity.name}: {diagnostic.message} at {diagnostic.position}")


if __name__ == "__main__":
    quick_start_example()
    configured_parser_example()
