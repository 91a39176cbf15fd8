"""
LangGraph StateGraph for one fetch cycle: locate -> weather -> present.
A failure in any node short-circuits to END with the failure result already set.
"""
from langgraph.graph import StateGraph, END

from graph.state import FetchState
from graph.nodes import locate_node, weather_node, present_node
from tools.base import FetchResult


def _route(next_node: str):
    def route(state: FetchState) -> str:
        return "done" if state.get("result") is not None else next_node
    return route


route_after_locate = _route("weather")
route_after_weather = _route("present")


def build_graph():
    """Build and compile the graph. Locate -> Weather -> Present -> END, any failure -> END."""
    builder = StateGraph(FetchState)

    builder.add_node("locate", locate_node)
    builder.add_node("weather", weather_node)
    builder.add_node("present", present_node)

    builder.set_entry_point("locate")
    builder.add_conditional_edges("locate", route_after_locate, {"weather": "weather", "done": END})
    builder.add_conditional_edges("weather", route_after_weather, {"present": "present", "done": END})
    builder.add_edge("present", END)

    return builder.compile()


# Singleton compiled graph
_graph = None


def get_graph():
    global _graph
    if _graph is None:
        _graph = build_graph()
    return _graph


def run_pipeline(source: str = "relay") -> FetchResult:
    """Run one full fetch cycle and return its result."""
    final = get_graph().invoke({"source": source})
    result = final.get("result")
    if result is None:
        return FetchResult.failure("Error fetching weather data: pipeline produced no result.", "MalformedPayload")
    return result
