#!/usr/bin/env python3
"""
Examples of using the flow diagram generator.

Run this file to generate example diagrams as SVG and PNG files.
"""

import logging

from bpmnflow import FlowchartGenerator


def example_simple_linear(generator):
    """Start, one task, end"""
    print("Example 1: Simple Linear Flow")

    input_text = """
    startEvent s "Start"
    task t "Do the work" [actor: Alice]
    endEvent e "End"
    s --> t
    t --> e
    """

    generator.save_svg(input_text, "example_linear.svg")
    generator.save_png(input_text, "example_linear.png", scale=2)
    print("  Saved: example_linear.svg, example_linear.png\n")


def example_order_handling(generator):
    """Gateway with a yes/no decision"""
    print("Example 2: Order Handling")

    input_text = """
    bpmnFlow
    startEvent start "Start"
    task T1 "Validate Order" actor="Alice"
    gateway G1 "Payment OK?"
    task T2 "Ship Order" actor="Bob"
    endEvent end "End"

    start --> T1
    T1 --> G1
    G1 -->|yes| T2
    G1 -->|no| end
    T2 --> end
    """

    generator.save_svg(input_text, "example_order.svg")
    generator.save_png(input_text, "example_order.png", scale=2)
    print("  Saved: example_order.svg, example_order.png\n")


def example_review_loop(generator):
    """Rework loop back to an earlier task"""
    print("Example 3: Review Loop")

    input_text = """
    startEvent s "Submitted"
    task draft "Draft" [actor: Author]
    task review "Review" [actor: Editor]
    gateway ok "Approved?"
    task publish "Publish"
    endEvent e "Done"

    s --> draft
    draft --> review
    review --> ok
    ok -->|yes| publish
    ok -->|no| draft
    publish --> e
    """

    generator.save_svg(input_text, "example_review.svg")
    generator.save_png(input_text, "example_review.png", scale=2)
    print("  Saved: example_review.svg, example_review.png\n")


def example_with_diagnostics(generator):
    """Typos and dangling edges are reported, not fatal"""
    print("Example 4: Diagnostics")

    input_text = """
    startEvent s "Start"
    task a "Check stock"
    tsak b "Typo in kind"
    s --> a
    a --> b
    """

    result = generator.generate(input_text, debug=True)
    for message in result.diagnostics:
        print(f"  warning: {message}")
    print(generator.get_trace().summary())
    print()


def main():
    logging.basicConfig(level=logging.ERROR)
    generator = FlowchartGenerator()

    print("=" * 50)
    print("FLOW DIAGRAM EXAMPLES")
    print("=" * 50 + "\n")

    example_simple_linear(generator)
    example_order_handling(generator)
    example_review_loop(generator)
    example_with_diagnostics(generator)

    print("=" * 50)
    print("All examples generated successfully!")
    print("=" * 50)


if __name__ == "__main__":
    main()
