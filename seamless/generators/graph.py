"""LangGraph workflow definition for batch scene generation."""

from langgraph.graph import END, StateGraph

from ..constants import MAX_CONSECUTIVE_FAILURES
from .nodes import accept_batch, handle_error, record_failure, request_scene_batch
from .state import RunState


def after_request(state: RunState) -> str:
    """Route a batch outcome to acceptance or failure accounting."""
    if state.get("batch_error"):
        return "record_failure"
    return "accept_batch"


def should_continue_generation(state: RunState) -> str:
    """Decide whether to request another batch, finish, or abort."""
    if len(state["scenes"]) >= state["target_count"]:
        return END
    if state["consecutive_failures"] >= MAX_CONSECUTIVE_FAILURES:
        return "handle_error"
    return "request_batch"


def build_graph() -> StateGraph:
    """Build and return the batch generation workflow graph.

    Workflow:
        request_batch → accept_batch   ↘
                     ↘ record_failure → (request_batch | END | handle_error → END)
    """
    workflow = StateGraph(RunState)

    workflow.add_node("request_batch", request_scene_batch)
    workflow.add_node("accept_batch", accept_batch)
    workflow.add_node("record_failure", record_failure)
    workflow.add_node("handle_error", handle_error)

    workflow.set_entry_point("request_batch")

    workflow.add_conditional_edges(
        "request_batch",
        after_request,
        {
            "accept_batch": "accept_batch",
            "record_failure": "record_failure",
        },
    )

    for node in ("accept_batch", "record_failure"):
        workflow.add_conditional_edges(
            node,
            should_continue_generation,
            {
                "request_batch": "request_batch",
                "handle_error": "handle_error",
                END: END,
            },
        )

    workflow.add_edge("handle_error", END)

    return workflow


def recursion_limit_for(target_count: int) -> int:
    """Recursion limit large enough for the worst case of a run.

    Each accepted scene may be preceded by a full streak of failed batches
    and every batch costs two graph steps.
    """
    return 2 * MAX_CONSECUTIVE_FAILURES * target_count + 10


# Compile the graph
graph = build_graph().compile()
