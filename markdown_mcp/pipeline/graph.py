"""LangGraph state machine wiring.

State flows:

  validate -> [error_check] --error--> finalize
                 |
                 ok
                 |
               render -> [error_check] --error--> finalize
                            |
                            ok
                            |
                  locate -> convert -> normalize -> [route_decision]
                                                       |
                                            +----------+----------+
                                            |                     |
                                       (structured)          (fallback)
                                            |                     |
                                            |                 fallback
                                            |                     |
                                            +----> finalize <-----+
                                                      |
                                                     END
"""

from langgraph.graph import END, StateGraph

from markdown_mcp.pipeline.nodes import (
    convert_node,
    error_check_node,
    fallback_node,
    finalize_node,
    locate_node,
    normalize_node,
    render_node,
    route_decision_node,
    validate_node,
)
from markdown_mcp.pipeline.state import ExtractionState


def build_graph():
    """Construct and compile the extraction graph.  Returns a runnable."""
    g = StateGraph(ExtractionState)

    # -- add nodes ----------------------------------------------------------
    g.add_node("validate", validate_node)
    g.add_node("render", render_node)
    g.add_node("locate", locate_node)
    g.add_node("convert", convert_node)
    g.add_node("normalize", normalize_node)
    g.add_node("fallback", fallback_node)
    g.add_node("finalize", finalize_node)

    # -- edges --------------------------------------------------------------
    g.set_entry_point("validate")
    g.add_conditional_edges(
        "validate",
        error_check_node,
        {"ok": "render", "error": "finalize"},
    )
    g.add_conditional_edges(
        "render",
        error_check_node,
        {"ok": "locate", "error": "finalize"},
    )
    g.add_edge("locate", "convert")
    g.add_edge("convert", "normalize")

    # Conditional: structural result vs plain-text fallback
    g.add_conditional_edges(
        "normalize",
        route_decision_node,
        {
            "structured": "finalize",
            "fallback": "fallback",
        },
    )
    g.add_edge("fallback", "finalize")
    g.add_edge("finalize", END)

    return g.compile()
