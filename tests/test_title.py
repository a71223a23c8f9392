"""Tests for merge request title formatting."""

from gitlab_util.title import format_title


def test_tickets_then_branch_then_title():
    """Test the documented example."""
    assert format_title("test MR", "uat", ["ES-123", "ES-234"]) == "[ES-123][ES-234][uat] test MR"


def test_no_tickets():
    """Test an empty ticket list only tags the branch."""
    assert format_title("test MR", "uat", []) == "[uat] test MR"
    assert format_title("x", "main") == "[main] x"


def test_ticket_order_preserved_without_dedup():
    """Test tickets keep input order and duplicates are kept."""
    assert format_title("x", "uat", ["B", "A", "B"]) == "[B][A][B][uat] x"


def test_ticket_input_not_mutated():
    """Test the ticket list is left untouched."""
    tickets = ["ES-2", "ES-1"]
    format_title("x", "uat", tickets)
    assert tickets == ["ES-2", "ES-1"]


def test_brackets_not_escaped():
    """Test bracket characters inside ids are passed through."""
    assert format_title("x", "uat", ["[A]"]) == "[[A]][uat] x"
