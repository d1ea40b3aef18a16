"""
LangGraph skill-chain factory.

The chain is linear: START -> skill_1 -> ... -> skill_n -> END, one node per
skill, in list order. Every node returns only the variable its skill writes.

Dependency-injection contract:
  - Receives an ordered list of Skill values built by create_skills().
  - langchain_core and langgraph are treated as orchestration-framework imports,
    acceptable in the application layer.
"""

import inspect

from langchain_core.runnables import RunnableConfig
from langgraph.graph import END, START, StateGraph

from src.application.agent.skills import Skill
from src.application.agent.state import AUGMENTED_VARIABLES, PipelineState
from src.domain.errors import SkillInvocationError


def build_skill_chain_graph(
    skills: list[Skill],
    initial_variables: tuple[str, ...] = AUGMENTED_VARIABLES,
):
    """Build and compile the linear skill-chain graph.

    Args:
        skills:            Skills in execution order.
        initial_variables: Variables present in the state before the first skill.

    Returns:
        Compiled LangGraph CompiledStateGraph ready for ainvoke() calls.

    Raises:
        ValueError: if the list is empty, a name repeats, or a skill reads a
                    variable that no earlier stage writes.
    """
    if not skills:
        raise ValueError("skill chain must contain at least one skill")
    _check_ordering(skills, initial_variables)

    workflow = StateGraph(PipelineState)
    previous = START
    for skill in skills:
        workflow.add_node(skill.name, _as_node(skill))
        workflow.add_edge(previous, skill.name)
        previous = skill.name
    workflow.add_edge(previous, END)
    return workflow.compile()


def _check_ordering(skills: list[Skill], initial_variables: tuple[str, ...]) -> None:
    available = set(initial_variables)
    seen: set[str] = set()
    for skill in skills:
        if skill.name in seen:
            raise ValueError(f"duplicate skill name: {skill.name!r}")
        seen.add(skill.name)
        missing = [name for name in skill.reads if name not in available]
        if missing:
            raise ValueError(
                f"skill {skill.name!r} reads {missing} before any stage writes them"
            )
        available.add(skill.writes)


def _as_node(skill: Skill):
    # Async skills run on the event loop so a cancelled attempt cancels them;
    # LangGraph runs sync skills in a worker thread.
    if inspect.iscoroutinefunction(skill.run):

        async def node(state: PipelineState, config: RunnableConfig) -> dict:
            try:
                text = await skill.run(state, config)
            except Exception as exc:
                raise SkillInvocationError(skill.name, exc) from exc
            return {skill.writes: text}

    else:

        def node(state: PipelineState, config: RunnableConfig) -> dict:
            try:
                text = skill.run(state, config)
            except Exception as exc:
                raise SkillInvocationError(skill.name, exc) from exc
            return {skill.writes: text}

    node.__name__ = skill.name
    return node
