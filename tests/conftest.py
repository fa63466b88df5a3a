"""Pytest configuration and shared fixtures for bpmnflow tests."""

import pytest

from bpmnflow import FlowchartGenerator, Parser


@pytest.fixture
def linear_input():
    """Start -> task -> end, with an actor on the task."""
    return """
    startEvent s "Start"
    task t "Do" [actor: Alice]
    endEvent e "End"
    s --> t
    t --> e
    """


@pytest.fixture
def branching_input():
    """Gateway with two labeled branches that merge again."""
    return """
    startEvent S "Start"
    gateway G "Approved?"
    task T1 "Ship"
    task T2 "Refund"
    endEvent E "End"
    S --> G
    G -->|yes| T1
    G -->|no| T2
    T1 --> E
    T2 --> E
    """


@pytest.fixture
def dangling_input():
    """Edge pointing at a node that is never declared."""
    return """
    startEvent s "Start"
    task t "Do"
    s --> t
    t --> ghost
    """


@pytest.fixture
def cyclic_input():
    """Retry loop back to an earlier task."""
    return """
    startEvent s "Start"
    task a "Validate"
    task b "Fix"
    s --> a
    a --> b
    b -->|retry| a
    """


@pytest.fixture
def order_input():
    """The order-handling example, in the mermaid plugin's surface syntax."""
    return """
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


@pytest.fixture
def generator():
    """Default FlowchartGenerator instance."""
    return FlowchartGenerator()


@pytest.fixture
def parser():
    """Default Parser instance."""
    return Parser()
