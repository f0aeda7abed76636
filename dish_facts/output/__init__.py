"""Output formatting for nutrition facts."""

from dish_facts.output.formatters import (
    format_facts_json,
    format_facts_json_string,
    format_facts_text,
    format_trace_event,
)

__all__ = [
    "format_facts_json",
    "format_facts_json_string",
    "format_facts_text",
    "format_trace_event",
]
